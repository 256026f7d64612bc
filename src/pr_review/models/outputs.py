"""Output models for parsed model responses and review runs."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from pr_review.utils.comment_identity import build_comment_id


class ReviewComment(BaseModel):
    """A single inline review comment.

    The ``id`` is derived from the comment content, so the same logical
    comment produced on a later run carries the same identifier.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    line: int = Field(ge=1)
    body: str = Field(min_length=1)
    id: str

    @classmethod
    def create(
        cls, path: str, line: int, body: str, rule_id: str | None = None
    ) -> "ReviewComment":
        """Create a comment with its content-derived identifier."""
        return cls(
            path=path,
            line=line,
            body=body,
            id=build_comment_id(path=path, line=line, body=body, rule_id=rule_id),
        )


class ParsedReviewData(BaseModel):
    """Summary text and ordered comments interpreted from one model response."""

    summary: str = ""
    comments: list[ReviewComment] = Field(default_factory=list)


def _text_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _string_items(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


class StructuredInlineComment(BaseModel):
    """One entry of ``inline_comments`` in a structured model response."""

    model_config = ConfigDict(extra="ignore")

    line: StrictInt
    title: str | None = None
    comment: str | None = None
    recommendation: str | None = None
    severity: str | None = None
    rule_id: str | None = None

    @field_validator(
        "title", "comment", "recommendation", "severity", "rule_id", mode="before"
    )
    @classmethod
    def drop_non_text(cls, v: Any) -> str | None:
        """Treat non-string values as missing instead of rejecting the entry."""
        return _text_or_none(v)


class StructuredReviewResponse(BaseModel):
    """JSON document a model returns when it follows the review contract.

    Every field is optional. Malformed members are discarded rather than
    failing validation, so a partially valid document still yields whatever
    it got right.
    """

    model_config = ConfigDict(extra="ignore")

    file_overview: str | None = None
    summary_points: list[str] = Field(default_factory=list)
    positive_insights: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    inline_comments: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("file_overview", mode="before")
    @classmethod
    def drop_non_text_overview(cls, v: Any) -> str | None:
        """Ignore an overview that isn't a string."""
        return _text_or_none(v)

    @field_validator("summary_points", "positive_insights", "risks", mode="before")
    @classmethod
    def keep_string_items(cls, v: Any) -> list[str]:
        """Keep only the string entries of a bullet list."""
        return _string_items(v)

    @field_validator("inline_comments", mode="before")
    @classmethod
    def keep_object_items(cls, v: Any) -> list[dict[str, Any]]:
        """Keep only the object entries of the inline comment list."""
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]


class FileReviewResult(BaseModel):
    """Interpretation of the model's review of a single file."""

    filename: str
    summary: str
    comments: list[ReviewComment] = Field(default_factory=list)

    def format_summary_section(self) -> str:
        """Render this file's part of the top-level summary comment."""
        return f"## {self.filename}\n\n{self.summary}\n\n"


class PRReviewOutcome(BaseModel):
    """Result of a full pull request review run."""

    summary: str = ""
    comments: list[ReviewComment] = Field(default_factory=list)
    reviewed_files: list[str] = Field(default_factory=list)
    skipped_files: list[str] = Field(default_factory=list)
    error_files: list[str] = Field(default_factory=list)
    approved: bool = False

    @property
    def total_comments(self) -> int:
        """Get the number of comments handed to delivery.

        Returns:
            The length of the comments list
        """
        return len(self.comments)

    @property
    def has_errors(self) -> bool:
        """Check if any files had errors during review.

        Returns:
            True if error_files is not empty
        """
        return len(self.error_files) > 0


class PullRequestDetails(BaseModel):
    """Current title and description of a pull request."""

    title: str
    body: str = ""


class PRContentUpdate(BaseModel):
    """Title and description proposed by the model for a pull request.

    Both fields are required and must contain text; unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: str
    description: str

    @field_validator("title", "description")
    @classmethod
    def require_text(cls, v: str) -> str:
        """Reject blank values."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v
