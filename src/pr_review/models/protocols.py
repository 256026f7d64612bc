"""Interfaces of the upstream collaborators the pipelines consume."""

from typing import Any, Protocol

from pr_review.models.github_types import FileDiff, ReviewThread
from pr_review.models.outputs import PullRequestDetails


class DiffSource(Protocol):
    """Lists the changed files of a pull request."""

    def list_files(self, owner: str, repo: str, pr_number: int) -> list[FileDiff]: ...

    def get_head_sha(self, owner: str, repo: str, pr_number: int) -> str: ...


class ModelClient(Protocol):
    """Produces one review response for a prompt pair, or None when empty."""

    async def complete(self, system_prompt: str, user_prompt: str) -> str | None: ...


class ReviewSink(Protocol):
    """Write side of the pull request review surface."""

    def create_review(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        *,
        comments: list[dict[str, Any]],
        event: str,
        commit_id: str | None = None,
        body: str | None = None,
    ) -> Any: ...

    def create_review_comment(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        *,
        body: str,
        commit_id: str,
        path: str,
        side: str,
        line: int,
    ) -> Any: ...

    def create_issue_comment(
        self, owner: str, repo: str, pr_number: int, *, body: str
    ) -> Any: ...


class ThreadInspector(Protocol):
    """Reads review threads with their resolution state and authors."""

    async def list_review_threads(
        self, owner: str, repo: str, pr_number: int
    ) -> list[ReviewThread]: ...


class IdentityProvider(Protocol):
    """Returns the login of the authenticated actor."""

    def get_login(self) -> str: ...


class PullRequestEditor(Protocol):
    """Reads and rewrites the title and description of a pull request."""

    def get_details(
        self, owner: str, repo: str, pr_number: int
    ) -> PullRequestDetails: ...

    def get_template(self, owner: str, repo: str, path: str) -> str | None: ...

    def update_content(
        self, owner: str, repo: str, pr_number: int, *, title: str, body: str
    ) -> Any: ...
