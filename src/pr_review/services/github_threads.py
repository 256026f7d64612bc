"""Review thread lookups through the GitHub GraphQL API."""

import logging
from typing import Any

import httpx

from pr_review.models.github_types import ReviewThread

logger = logging.getLogger(__name__)

REVIEW_THREADS_QUERY = """
query($owner: String!, $repo: String!, $pr: Int!, $cursor: String) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $pr) {
      reviewThreads(first: 100, after: $cursor) {
        pageInfo { hasNextPage endCursor }
        nodes {
          isResolved
          comments(first: 100) {
            nodes { author { login } }
          }
        }
      }
    }
  }
}
"""


class GraphQLError(RuntimeError):
    """Raised when a GraphQL response carries errors."""


def _check_graphql_errors(result: dict[str, Any], context: str) -> None:
    errors = result.get("errors")
    if errors:
        raise GraphQLError(
            f"GraphQL error in {context}: {errors[0].get('message', errors)}"
        )


def parse_review_threads(nodes: list[dict[str, Any]]) -> list[ReviewThread]:
    """Convert raw ``reviewThreads`` nodes into ReviewThread models."""
    threads = []
    for node in nodes:
        comments = (node.get("comments") or {}).get("nodes") or []
        logins = [
            comment["author"]["login"]
            for comment in comments
            if comment.get("author") and comment["author"].get("login")
        ]
        threads.append(
            ReviewThread(is_resolved=bool(node.get("isResolved")), author_logins=logins)
        )
    return threads


class GitHubThreadInspector:
    """Lists pull request review threads with their resolution state."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token: str,
        graphql_url: str = "https://api.github.com/graphql",
    ) -> None:
        self.http_client = http_client
        self.graphql_url = graphql_url
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
        }

    async def list_review_threads(
        self, owner: str, repo: str, pr_number: int
    ) -> list[ReviewThread]:
        """Fetch every review thread of the PR, following pagination.

        Raises:
            httpx.HTTPError: If a request fails
            GraphQLError: If GitHub reports a query error
        """
        nodes: list[dict[str, Any]] = []
        cursor: str | None = None
        page = 0

        while True:
            page += 1
            variables: dict[str, Any] = {"owner": owner, "repo": repo, "pr": pr_number}
            if cursor:
                variables["cursor"] = cursor

            response = await self.http_client.post(
                self.graphql_url,
                json={"query": REVIEW_THREADS_QUERY, "variables": variables},
                headers=self.headers,
            )
            response.raise_for_status()
            result = response.json()
            _check_graphql_errors(
                result, f"fetch review threads for PR #{pr_number} (page {page})"
            )

            pr_data = (
                (result.get("data") or {}).get("repository") or {}
            ).get("pullRequest") or {}
            threads_data = pr_data.get("reviewThreads") or {}
            nodes.extend(threads_data.get("nodes") or [])

            page_info = threads_data.get("pageInfo") or {}
            if page_info.get("hasNextPage") and page_info.get("endCursor"):
                cursor = page_info["endCursor"]
            else:
                break

        threads = parse_review_threads(nodes)
        logger.info(f"Fetched {len(threads)} review threads for PR #{pr_number}")
        return threads
