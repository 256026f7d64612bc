"""Applying a model-proposed title and description to a pull request."""

import asyncio
import json
import logging
import re
from typing import Any

from pr_review.models.outputs import PRContentUpdate, PullRequestDetails
from pr_review.models.protocols import PullRequestEditor

logger = logging.getLogger(__name__)

JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


class ContentParseError(ValueError):
    """The model response holds no decodable JSON document."""


def _decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Content response is not bare JSON, searching for an object: {e}")

    # Models sometimes wrap the object in prose or a code fence
    match = JSON_OBJECT_PATTERN.search(text)
    if match is None:
        raise ContentParseError("Failed to parse AI response as JSON")

    try:
        return json.loads(match.group(0))
    except (ValueError, RecursionError) as e:
        raise ContentParseError("Failed to parse AI response as JSON") from e


def parse_content_update(response: str) -> PRContentUpdate:
    """Read the proposed title and description from a model response.

    The response is decoded as JSON, falling back to the outermost ``{...}``
    span when it carries surrounding text.

    Raises:
        ContentParseError: If no JSON document can be decoded
        pydantic.ValidationError: If the document lacks a title or description
    """
    return PRContentUpdate.model_validate(_decode_json(response))


def needs_update(current: PullRequestDetails, update: PRContentUpdate) -> bool:
    """Tell whether the proposal differs from the pull request's current content."""
    return current.title != update.title or current.body != update.description


async def update_pull_request_content(
    editor: PullRequestEditor,
    owner: str,
    repo: str,
    pr_number: int,
    response: str,
) -> bool:
    """Apply a model response to the pull request's title and description.

    Args:
        editor: Pull request surface to read from and write to
        owner: Repository owner
        repo: Repository name
        pr_number: Pull request number
        response: Raw model response

    Returns:
        True if the pull request was edited, False if nothing changed

    Raises:
        ContentParseError: If the response holds no JSON document
        pydantic.ValidationError: If the document lacks a title or description
        GithubException: If reading or editing the pull request fails
    """
    try:
        update = parse_content_update(response)
        current = await asyncio.to_thread(editor.get_details, owner, repo, pr_number)

        if not needs_update(current, update):
            logger.info(f"No changes needed for {owner}/{repo}#{pr_number}")
            return False

        await asyncio.to_thread(
            editor.update_content,
            owner,
            repo,
            pr_number,
            title=update.title,
            body=update.description,
        )
    except Exception as e:
        logger.error(f"Failed to update content of {owner}/{repo}#{pr_number}: {e}")
        raise

    logger.info(f"Updated title and description of {owner}/{repo}#{pr_number}")
    return True
