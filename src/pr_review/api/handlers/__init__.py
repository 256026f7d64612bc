"""Handlers for pull request review and content runs."""

from .pr_content_handler import handle_pr_content
from .pr_review_handler import handle_pr_review

__all__ = ["handle_pr_content", "handle_pr_review"]
