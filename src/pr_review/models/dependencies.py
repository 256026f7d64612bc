"""Configuration and collaborator bundles passed into the pipelines."""

from pydantic import BaseModel, ConfigDict, Field, SkipValidation, field_validator

from pr_review.models.protocols import (
    DiffSource,
    IdentityProvider,
    ModelClient,
    PullRequestEditor,
    ReviewSink,
    ThreadInspector,
)
from pr_review.prompts.code_reviewer_prompt import DEFAULT_REVIEW_FOCUS


class ReviewConfig(BaseModel):
    """Explicit configuration for one review run.

    Built by the entry point from environment settings; the parsing and
    delivery code only ever sees this value.
    """

    model_config = ConfigDict(frozen=True)

    max_files: int = 10
    exclude_patterns: str = "*.md,*.txt,*.json,*.yml,*.yaml"
    min_severity: str = "info"
    auto_approve: bool = False
    review_focus: str = DEFAULT_REVIEW_FOCUS
    bot_name: str = "AI Code Review"


class ContentConfig(BaseModel):
    """Explicit configuration for one title and description update."""

    model_config = ConfigDict(frozen=True)

    include_file_list: bool = False
    custom_instructions: str = ""
    template_path: str = ".github/pull_request_template.md"
    max_patch_chars: int = 2000


class PullRequestContext(BaseModel):
    """Coordinates of the pull request a run operates on."""

    repo_full_name: str
    pr_number: int

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("repo_full_name")
    @classmethod
    def validate_repo_full_name(cls, v: str) -> str:
        """Validate repo_full_name is in 'owner/repo' format."""
        if not v or not v.strip():
            raise ValueError("repo_full_name cannot be empty")

        if v.count("/") != 1:
            raise ValueError(
                f"repo_full_name must be in 'owner/repo' format, got: '{v}'"
            )

        parts = v.split("/")
        if not parts[0] or not parts[1]:
            raise ValueError(
                f"repo_full_name must have non-empty owner and repo parts, got: '{v}'"
            )

        return v

    @field_validator("pr_number")
    @classmethod
    def validate_pr_number(cls, v: int) -> int:
        """Validate pr_number is positive."""
        if v <= 0:
            raise ValueError(f"pr_number must be positive (> 0), got: {v}")

        return v

    @property
    def owner(self) -> str:
        """Repository owner part of repo_full_name."""
        return self.repo_full_name.split("/")[0]

    @property
    def repo(self) -> str:
        """Repository name part of repo_full_name."""
        return self.repo_full_name.split("/")[1]


class ReviewDependencies(PullRequestContext):
    """Collaborators needed to review one pull request.

    Holds the pull request coordinates plus the upstream capabilities the
    pipeline consumes. The thread inspector and identity provider are only
    needed when auto-approval is enabled.
    """

    diff_source: SkipValidation[DiffSource]
    model_client: SkipValidation[ModelClient]
    review_sink: SkipValidation[ReviewSink]
    thread_inspector: SkipValidation[ThreadInspector | None] = Field(
        default=None, exclude=True
    )
    identity_provider: SkipValidation[IdentityProvider | None] = Field(
        default=None, exclude=True
    )


class ContentDependencies(PullRequestContext):
    """Collaborators needed to rewrite a pull request's title and description."""

    diff_source: SkipValidation[DiffSource]
    model_client: SkipValidation[ModelClient]
    editor: SkipValidation[PullRequestEditor]
