"""GitHub Actions entry points for the AI PR reviewer and PR content writer."""

import asyncio
import json
import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Any

import httpx
from github import Auth, Github

from pr_review.agents.code_reviewer import AgentModelClient, build_openai_model
from pr_review.api.handlers.pr_content_handler import handle_pr_content
from pr_review.api.handlers.pr_review_handler import handle_pr_review
from pr_review.config.settings import Settings, settings
from pr_review.models.dependencies import ContentDependencies, ReviewDependencies
from pr_review.models.outputs import PRReviewOutcome
from pr_review.services.github_threads import GitHubThreadInspector
from pr_review.tools.github_tools import (
    GitHubDiffSource,
    GitHubIdentityProvider,
    GitHubPullRequestEditor,
    GitHubPullRequests,
    GitHubReviewSink,
)
from pr_review.utils.logging import setup_observability

logger = logging.getLogger(__name__)


def load_pull_request_context(env: dict[str, str] | None = None) -> tuple[str, int]:
    """Read the repository and pull request number of the triggering event.

    Raises:
        RuntimeError: If the workflow was not triggered by a pull request
    """
    env = dict(os.environ) if env is None else env

    repo_full_name = env.get("GITHUB_REPOSITORY", "")
    event_path = env.get("GITHUB_EVENT_PATH")
    if not repo_full_name or not event_path:
        raise RuntimeError("GITHUB_REPOSITORY and GITHUB_EVENT_PATH must be set")

    event: dict[str, Any] = json.loads(Path(event_path).read_text(encoding="utf-8"))
    pull_request = event.get("pull_request")
    if not pull_request:
        raise RuntimeError("This action only runs on pull requests")

    return repo_full_name, int(pull_request["number"])


def write_action_output(name: str, value: str, output_path: str | None) -> None:
    """Append a multi-line step output to the ``GITHUB_OUTPUT`` file."""
    if not output_path:
        return
    delimiter = f"EOF_{uuid.uuid4().hex}"
    with open(output_path, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def build_github_client(app_settings: Settings) -> Github:
    """Create the PyGithub client for the configured token and API URL."""
    return Github(
        auth=Auth.Token(app_settings.github_token),
        base_url=app_settings.github_api_url,
        per_page=100,
    )


def build_model_client(app_settings: Settings, max_tokens: int) -> AgentModelClient:
    """Create the model client with the given completion token budget."""
    model = build_openai_model(
        app_settings.openai_model,
        api_key=app_settings.openai_api_key,
        base_url=app_settings.openai_base_url,
    )
    return AgentModelClient(
        model,
        model_settings={
            "max_tokens": max_tokens,
            "temperature": app_settings.review_temperature,
        },
    )


async def run(app_settings: Settings = settings) -> PRReviewOutcome:
    """Review the pull request that triggered the workflow."""
    app_settings.require_credentials()
    repo_full_name, pr_number = load_pull_request_context()
    logger.info(f"Processing PR #{pr_number} in {repo_full_name}")

    github_client = build_github_client(app_settings)
    pulls = GitHubPullRequests(github_client)
    model_client = build_model_client(app_settings, app_settings.max_tokens)

    async with httpx.AsyncClient(timeout=app_settings.http_timeout) as http_client:
        deps = ReviewDependencies(
            repo_full_name=repo_full_name,
            pr_number=pr_number,
            diff_source=GitHubDiffSource(pulls),
            model_client=model_client,
            review_sink=GitHubReviewSink(pulls),
            thread_inspector=GitHubThreadInspector(
                http_client,
                token=app_settings.github_token,
                graphql_url=app_settings.github_graphql_url,
            ),
            identity_provider=GitHubIdentityProvider(
                github_client, login=app_settings.bot_login
            ),
        )
        return await handle_pr_review(deps, app_settings.to_review_config())


async def run_content(app_settings: Settings = settings) -> bool:
    """Rewrite the title and description of the triggering pull request."""
    app_settings.require_credentials()
    repo_full_name, pr_number = load_pull_request_context()
    logger.info(f"Generating content for PR #{pr_number} in {repo_full_name}")

    pulls = GitHubPullRequests(build_github_client(app_settings))
    deps = ContentDependencies(
        repo_full_name=repo_full_name,
        pr_number=pr_number,
        diff_source=GitHubDiffSource(pulls),
        model_client=build_model_client(app_settings, app_settings.content_max_tokens),
        editor=GitHubPullRequestEditor(pulls),
    )
    return await handle_pr_content(deps, app_settings.to_content_config())


def main() -> int:
    """Console entry point; returns the process exit code."""
    setup_observability()

    try:
        outcome = asyncio.run(run())
    except Exception:
        logger.exception("Action failed")
        return 1

    write_action_output("review-summary", outcome.summary, os.getenv("GITHUB_OUTPUT"))
    return 0


def content_main() -> int:
    """Console entry point of the title and description writer."""
    setup_observability()

    try:
        updated = asyncio.run(run_content())
    except Exception:
        logger.exception("Action failed")
        return 1

    write_action_output(
        "content-updated", "true" if updated else "false", os.getenv("GITHUB_OUTPUT")
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
