"""Pull request title and description generation."""

import asyncio
import logging

from pr_review.models.dependencies import ContentConfig, ContentDependencies
from pr_review.prompts.pr_content_prompt import (
    build_content_user_prompt,
    create_content_system_prompt,
)
from pr_review.services.content_updater import update_pull_request_content

logger = logging.getLogger(__name__)


async def handle_pr_content(deps: ContentDependencies, config: ContentConfig) -> bool:
    """
    Rewrite a pull request's title and description from its changes.

    === BEHAVIOR ===

    FETCH current title/description, changed files and the template concurrently
    KEEP only files with a patch
    ASK the model for a {"title", "description"} JSON document
    EDIT the pull request when the proposal differs from what is there

    Edge Cases:
        - Missing template: the prompt is built without one
        - Empty model response: RuntimeError
        - Undecodable or incomplete document: the parse/validation error propagates

    Returns:
        True if the pull request was edited
    """
    owner, repo, pr_number = deps.owner, deps.repo, deps.pr_number
    logger.info(f"Generating title and description for {deps.repo_full_name}#{pr_number}")

    details, files, template = await asyncio.gather(
        asyncio.to_thread(deps.editor.get_details, owner, repo, pr_number),
        asyncio.to_thread(deps.diff_source.list_files, owner, repo, pr_number),
        asyncio.to_thread(deps.editor.get_template, owner, repo, config.template_path),
    )

    diffs = [file for file in files if file.patch]
    logger.info(f"Describing {len(diffs)} of {len(files)} changed files")

    system_prompt = create_content_system_prompt(config.custom_instructions, template)
    user_prompt = build_content_user_prompt(
        details.title,
        details.body,
        diffs,
        include_file_list=config.include_file_list,
        max_patch_chars=config.max_patch_chars,
    )

    response = await deps.model_client.complete(system_prompt, user_prompt)
    if not response or not response.strip():
        raise RuntimeError("No response from AI model")

    return await update_pull_request_content(
        deps.editor, owner, repo, pr_number, response
    )
