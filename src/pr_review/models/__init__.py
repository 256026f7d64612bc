"""Data models for the AI PR reviewer."""

from .dependencies import (
    ContentConfig,
    ContentDependencies,
    PullRequestContext,
    ReviewConfig,
    ReviewDependencies,
)
from .github_types import FileDiff, ReviewThread
from .outputs import (
    FileReviewResult,
    ParsedReviewData,
    PRContentUpdate,
    PRReviewOutcome,
    PullRequestDetails,
    ReviewComment,
    StructuredInlineComment,
    StructuredReviewResponse,
)
from .protocols import (
    DiffSource,
    IdentityProvider,
    ModelClient,
    PullRequestEditor,
    ReviewSink,
    ThreadInspector,
)

__all__ = [
    "ContentConfig",
    "ContentDependencies",
    "PullRequestContext",
    "ReviewConfig",
    "ReviewDependencies",
    "FileDiff",
    "ReviewThread",
    "FileReviewResult",
    "ParsedReviewData",
    "PRContentUpdate",
    "PRReviewOutcome",
    "PullRequestDetails",
    "ReviewComment",
    "StructuredInlineComment",
    "StructuredReviewResponse",
    "DiffSource",
    "IdentityProvider",
    "ModelClient",
    "PullRequestEditor",
    "ReviewSink",
    "ThreadInspector",
]
