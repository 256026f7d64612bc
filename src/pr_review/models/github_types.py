"""GitHub-specific type definitions."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FileStatus = Literal[
    "added", "removed", "modified", "renamed", "copied", "changed", "unchanged"
]


class FileDiff(BaseModel):
    """File diff information from a pull request.

    Represents changes to a single file in a PR, including the diff patch
    and metadata about additions/deletions. Files without a patch (binary
    files, very large diffs) are skipped by the review pipeline.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    status: FileStatus = "modified"
    patch: str | None = None
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    previous_filename: str | None = None

    @property
    def has_patch(self) -> bool:
        """Check if there is diff text to review.

        Returns:
            True if the patch is present and not blank
        """
        return bool(self.patch and self.patch.strip())

    @property
    def is_deleted_file(self) -> bool:
        """Check if this file was deleted.

        Returns:
            True if the file status is "removed"
        """
        return self.status == "removed"


class ReviewThread(BaseModel):
    """A pull request review thread as seen by the approval check."""

    is_resolved: bool
    author_logins: list[str] = Field(default_factory=list)

    def has_author(self, login: str) -> bool:
        """Check whether any comment in the thread was written by ``login``."""
        return any(author.lower() == login.lower() for author in self.author_logins)
