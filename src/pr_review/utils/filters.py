"""File filtering utilities for determining which files to review."""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .glob_matcher import create_glob_matcher

if TYPE_CHECKING:
    from pr_review.models.github_types import FileDiff


def parse_exclude_patterns(exclude_patterns: str) -> list[str]:
    """Split a comma-separated pattern list, dropping blank entries.

    Args:
        exclude_patterns: Patterns such as ``"*.md, *.lock,,docs/**"``

    Returns:
        Trimmed, non-empty patterns in their original order
    """
    return [pattern.strip() for pattern in exclude_patterns.split(",") if pattern.strip()]


def should_review_file(file_path: str, exclude_patterns: str) -> bool:
    """Determine if a file should be included in code review.

    Args:
        file_path: Path of the file as reported by GitHub
        exclude_patterns: Comma-separated glob patterns to exclude

    Returns:
        True if no pattern matches the path
    """
    matchers = [create_glob_matcher(p) for p in parse_exclude_patterns(exclude_patterns)]
    return not any(matches(file_path) for matches in matchers)


def filter_files(
    files: Sequence["FileDiff"], exclude_patterns: str, max_files: int
) -> list["FileDiff"]:
    """Admit files for review.

    Drops files whose name matches any exclusion pattern, then keeps at most
    ``max_files`` of the remainder in their original order.

    Args:
        files: Changed files of the pull request
        exclude_patterns: Comma-separated glob patterns to exclude
        max_files: Maximum number of files to return

    Returns:
        Admitted files
    """
    if max_files <= 0:
        return []

    matchers = [create_glob_matcher(p) for p in parse_exclude_patterns(exclude_patterns)]
    admitted = [
        file
        for file in files
        if not any(matches(file.filename) for matches in matchers)
    ]

    return admitted[:max_files]
