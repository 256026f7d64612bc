"""Services that write review results and content back to pull requests."""

from pr_review.services.comment_delivery import (
    DeliveryReport,
    auto_approve_if_resolved,
    post_comments_to_pr,
)
from pr_review.services.content_updater import (
    ContentParseError,
    update_pull_request_content,
)
from pr_review.services.github_threads import GitHubThreadInspector

__all__ = [
    "ContentParseError",
    "DeliveryReport",
    "GitHubThreadInspector",
    "auto_approve_if_resolved",
    "post_comments_to_pr",
    "update_pull_request_content",
]
