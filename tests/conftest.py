"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, Mock

import pytest

from pr_review.models.dependencies import ReviewConfig, ReviewDependencies
from pr_review.models.github_types import FileDiff
from pr_review.models.outputs import ReviewComment
from pr_review.utils.severity import SEVERITY_DOC_URL


def severity_body(text: str, icon: str, level: str) -> str:
    """Build a comment body ending in a rendered severity marker."""
    return f"{text}\n\n_Severity:_ {icon} {level} — see {SEVERITY_DOC_URL}"


@pytest.fixture
def mixed_severity_comments() -> list[ReviewComment]:
    """Return comments at every severity level plus an unlabeled one."""
    return [
        ReviewComment(path="file1.js", line=1, body=severity_body("Info comment", "ℹ️", "info"), id="1"),
        ReviewComment(path="file1.js", line=2, body=severity_body("Low severity comment", "✅", "low"), id="2"),
        ReviewComment(path="file1.js", line=3, body=severity_body("Medium severity comment", "⚠️", "medium"), id="3"),
        ReviewComment(path="file1.js", line=4, body=severity_body("High severity comment", "🔥", "high"), id="4"),
        ReviewComment(path="file1.js", line=5, body="Comment without severity", id="5"),
    ]


@pytest.fixture
def review_sink() -> Mock:
    """Return a mock review sink where every call succeeds."""
    sink = Mock()
    sink.create_review.return_value = {}
    sink.create_review_comment.return_value = {}
    sink.create_issue_comment.return_value = {}
    return sink


@pytest.fixture
def diff_source() -> Mock:
    """Return a mock diff source with two reviewable files and one excluded."""
    source = Mock()
    source.get_head_sha.return_value = "abc123def456"  # pragma: allowlist secret
    source.list_files.return_value = [
        FileDiff(filename="src/app.py", status="modified", patch="@@ -1,2 +1,3 @@\n+x = 1"),
        FileDiff(filename="README.md", status="modified", patch="@@ -1 +1 @@\n+docs"),
        FileDiff(filename="src/util.py", status="added", patch="@@ -0,0 +1 @@\n+y = 2"),
    ]
    return source


@pytest.fixture
def model_client() -> Mock:
    """Return a mock model client; set ``complete.side_effect`` per test."""
    client = Mock()
    client.complete = AsyncMock(return_value=None)
    return client


@pytest.fixture
def review_deps(diff_source, model_client, review_sink) -> ReviewDependencies:
    """Return ReviewDependencies wired to the mock collaborators."""
    return ReviewDependencies(
        repo_full_name="octo/hello-world",
        pr_number=42,
        diff_source=diff_source,
        model_client=model_client,
        review_sink=review_sink,
    )


@pytest.fixture
def review_config() -> ReviewConfig:
    """Return the default review configuration."""
    return ReviewConfig()
