"""PyGithub-backed implementations of the pull request collaborators."""

import logging
from typing import Any, Literal, cast

from github import Github, GithubException
from github.PullRequest import PullRequest
from github.Repository import Repository

from pr_review.models.github_types import FileDiff, FileStatus
from pr_review.models.outputs import PullRequestDetails

logger = logging.getLogger(__name__)

# Keys of a review record understood by the batched review endpoint
REVIEW_COMMENT_KEYS = ("path", "body", "line", "side")


class GitHubPullRequests:
    """Caches repository and pull request objects for one run.

    Avoids refetching the same objects for every comment posted.
    """

    def __init__(self, github_client: Github) -> None:
        self.github_client = github_client
        self._repos: dict[str, Repository] = {}
        self._pulls: dict[tuple[str, int], PullRequest] = {}

    def get_repo(self, owner: str, repo: str) -> Repository:
        """Return the repository object for ``owner/repo``."""
        full_name = f"{owner}/{repo}"
        if full_name not in self._repos:
            self._repos[full_name] = self.github_client.get_repo(full_name)
            logger.debug(f"Cached repo object for {full_name}")
        return self._repos[full_name]

    def get_pull(self, owner: str, repo: str, pr_number: int) -> PullRequest:
        """Return the pull request object for ``owner/repo#pr_number``."""
        key = (f"{owner}/{repo}", pr_number)
        if key not in self._pulls:
            self._pulls[key] = self.get_repo(owner, repo).get_pull(pr_number)
            logger.debug(f"Cached PR object for {key[0]}#{pr_number}")
        return self._pulls[key]


class GitHubDiffSource:
    """Lists changed files of a pull request through the REST API."""

    def __init__(self, pulls: GitHubPullRequests) -> None:
        self.pulls = pulls

    def list_files(self, owner: str, repo: str, pr_number: int) -> list[FileDiff]:
        """List all files changed in the PR, in GitHub's order.

        Raises:
            GithubException: If GitHub API request fails
        """
        pr = self.pulls.get_pull(owner, repo, pr_number)
        files = [
            FileDiff(
                filename=file.filename,
                # PyGithub returns status as str, cast to Literal type for FileDiff
                status=cast(FileStatus, file.status),
                patch=file.patch,
                additions=file.additions,
                deletions=file.deletions,
                changes=file.changes,
                previous_filename=file.previous_filename,
            )
            for file in pr.get_files()
        ]

        logger.info(f"Found {len(files)} changed files in PR #{pr_number}")
        return files

    def get_head_sha(self, owner: str, repo: str, pr_number: int) -> str:
        """Return the SHA of the pull request's head commit."""
        return self.pulls.get_pull(owner, repo, pr_number).head.sha


class GitHubReviewSink:
    """Posts reviews and comments to a pull request.

    Errors from GitHub are raised as ``GithubException``; deciding what to do
    about them is left to the caller.
    """

    def __init__(self, pulls: GitHubPullRequests) -> None:
        self.pulls = pulls

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
    ) -> Any:
        """Create a review, optionally carrying inline comments."""
        pr = self.pulls.get_pull(owner, repo, pr_number)
        kwargs: dict[str, Any] = {"event": event}

        if commit_id:
            kwargs["commit"] = self.pulls.get_repo(owner, repo).get_commit(commit_id)
        if body:
            kwargs["body"] = body
        if comments:
            kwargs["comments"] = [
                {key: record[key] for key in REVIEW_COMMENT_KEYS if key in record}
                for record in comments
            ]

        review = pr.create_review(**kwargs)
        logger.info(
            f"Created {event} review on PR #{pr_number} with {len(comments)} comments"
        )
        return review

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
    ) -> Any:
        """Create a single inline review comment."""
        pr = self.pulls.get_pull(owner, repo, pr_number)
        commit = self.pulls.get_repo(owner, repo).get_commit(commit_id)
        return pr.create_review_comment(
            body=body,
            commit=commit,
            path=path,
            line=line,
            side=cast(Literal["LEFT", "RIGHT"], side),
        )

    def create_issue_comment(
        self, owner: str, repo: str, pr_number: int, *, body: str
    ) -> Any:
        """Post a plain comment on the pull request conversation."""
        pr = self.pulls.get_pull(owner, repo, pr_number)
        comment = pr.create_issue_comment(body=body)
        logger.info(f"Posted issue comment on PR #{pr_number}")
        return comment


class GitHubPullRequestEditor:
    """Reads and edits a pull request's title and description."""

    def __init__(self, pulls: GitHubPullRequests) -> None:
        self.pulls = pulls

    def get_details(self, owner: str, repo: str, pr_number: int) -> PullRequestDetails:
        """Return the current title and description of the pull request."""
        pr = self.pulls.get_pull(owner, repo, pr_number)
        return PullRequestDetails(title=pr.title, body=pr.body or "")

    def get_template(self, owner: str, repo: str, path: str) -> str | None:
        """Return the text of a repository file, or None if it can't be read.

        A missing template is normal, so GitHub errors are logged and
        reported as None.
        """
        try:
            content = self.pulls.get_repo(owner, repo).get_contents(path)
        except GithubException as e:
            logger.info(f"No PR template at {path}: {e.status}")
            return None

        # A directory path returns a list of entries
        if isinstance(content, list):
            logger.warning(f"PR template path {path} is a directory")
            return None

        return content.decoded_content.decode("utf-8")

    def update_content(
        self, owner: str, repo: str, pr_number: int, *, title: str, body: str
    ) -> None:
        """Replace the pull request's title and description."""
        pr = self.pulls.get_pull(owner, repo, pr_number)
        pr.edit(title=title, body=body)
        logger.info(f"Updated title and description of PR #{pr_number}")


class GitHubIdentityProvider:
    """Resolves the login the token authenticates as."""

    def __init__(self, github_client: Github, login: str | None = None) -> None:
        self.github_client = github_client
        self._login = login

    def get_login(self) -> str:
        """Return the authenticated login, fetching it once.

        Installation tokens can't read ``/user``; configure the bot login
        explicitly in that case.
        """
        if self._login is None:
            self._login = self.github_client.get_user().login
            logger.debug(f"Authenticated as {self._login}")
        return self._login
