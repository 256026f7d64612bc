"""Utility functions and helpers."""

from .comment_identity import append_identity_marker, build_comment_id
from .filters import filter_files, should_review_file
from .glob_matcher import create_glob_matcher

__all__ = [
    "append_identity_marker",
    "build_comment_id",
    "create_glob_matcher",
    "filter_files",
    "should_review_file",
]
