"""Pull request review orchestration.

Runs one review pass over a pull request: list and admit files, ask the
model about each file in turn, interpret the responses, filter by severity,
deliver the comments and the summary, and optionally auto-approve.
"""

import asyncio
import logging

from pr_review.models.dependencies import ReviewConfig, ReviewDependencies
from pr_review.models.github_types import FileDiff
from pr_review.models.outputs import FileReviewResult, PRReviewOutcome, ReviewComment
from pr_review.models.protocols import ModelClient
from pr_review.prompts.code_reviewer_prompt import build_user_prompt, create_system_prompt
from pr_review.services.comment_delivery import (
    auto_approve_if_resolved,
    post_comments_to_pr,
)
from pr_review.utils.filters import filter_files
from pr_review.utils.review_parser import parse_review_response
from pr_review.utils.severity import filter_comments_by_severity

logger = logging.getLogger(__name__)


# === MAIN HANDLER ===


async def handle_pr_review(
    deps: ReviewDependencies, config: ReviewConfig
) -> PRReviewOutcome:
    """
    Review a pull request and publish the results.

    === DEPENDENCIES ===
    - DiffSource (changed files, head commit)
    - ModelClient (one completion per file)
    - ReviewSink (inline comments, summary comment, approval)
    - ThreadInspector + IdentityProvider (only when auto-approval is on)

    === BEHAVIOR ===

    Logic Flow:

    FETCH head SHA and changed files concurrently
    ADMIT files via exclude patterns and max_files
    IF nothing admitted THEN RETURN empty outcome

    FOR EACH admitted file, in order:
        SKIP files without a patch
        ASK the model; on error record the file and continue
        SKIP files with an empty response
        PARSE response; APPEND comments; APPEND "## <file>" summary section

    FILTER comments by config.min_severity
    POST comments (batch → per-comment → issue comment fallback)
    POST summary as one issue comment
    IF config.auto_approve THEN approve when all bot threads are resolved

    Edge Cases:
        - Model failure for one file: logged, file listed in error_files
        - Delivery failures: absorbed by the delivery tiers, never raised
        - Summary comment failure: propagates to the caller
    """
    owner, repo, pr_number = deps.owner, deps.repo, deps.pr_number
    review_key = f"{deps.repo_full_name}#{pr_number}"
    logger.info(f"Starting review for {review_key}")

    head_sha, files = await asyncio.gather(
        asyncio.to_thread(deps.diff_source.get_head_sha, owner, repo, pr_number),
        asyncio.to_thread(deps.diff_source.list_files, owner, repo, pr_number),
    )

    admitted = filter_files(files, config.exclude_patterns, config.max_files)
    outcome = PRReviewOutcome()

    if not admitted:
        logger.info("No files to review after filtering")
        return outcome

    logger.info(f"Reviewing {len(admitted)} of {len(files)} files")
    system_prompt = create_system_prompt()
    all_comments: list[ReviewComment] = []

    for file in admitted:
        if not file.has_patch:
            logger.info(f"No diff available for {file.filename}")
            outcome.skipped_files.append(file.filename)
            continue

        logger.info(f"Reviewing file: {file.filename}")
        try:
            result = await _review_file(
                file, deps.model_client, system_prompt, config.review_focus
            )
        except Exception as e:
            logger.error(f"Error reviewing {file.filename}: {e}")
            outcome.error_files.append(file.filename)
            continue

        if result is None:
            outcome.skipped_files.append(file.filename)
            continue

        outcome.reviewed_files.append(file.filename)
        all_comments.extend(result.comments)
        outcome.summary += result.format_summary_section()

    outcome.comments = filter_comments_by_severity(all_comments, config.min_severity)

    if outcome.comments:
        await post_comments_to_pr(
            deps.review_sink, owner, repo, pr_number, outcome.comments, head_sha
        )

    if outcome.summary:
        await _post_summary_comment(deps, config, outcome.summary)

    if config.auto_approve:
        outcome.approved = await _auto_approve_if_enabled(deps, head_sha)

    logger.info(
        f"Review completed for {review_key}: {len(outcome.reviewed_files)} files, "
        f"{outcome.total_comments} comments, {len(outcome.error_files)} errors"
    )
    return outcome


# === HELPER FUNCTIONS ===


async def _review_file(
    file: FileDiff,
    model_client: ModelClient,
    system_prompt: str,
    review_focus: str,
) -> FileReviewResult | None:
    """Ask the model about one file and interpret its answer.

    Returns None when the model produced no content.
    """
    review_text = await model_client.complete(
        system_prompt, build_user_prompt(file.filename, file.patch or "", review_focus)
    )
    if not review_text or not review_text.strip():
        logger.warning(f"No review content received for {file.filename}")
        return None

    parsed = parse_review_response(review_text, file.filename)
    logger.debug(f"Parsed {len(parsed.comments)} comments for {file.filename}")
    return FileReviewResult(
        filename=file.filename, summary=parsed.summary, comments=parsed.comments
    )


def format_summary_comment(bot_name: str, summary: str) -> str:
    """Wrap the concatenated per-file summaries into the top-level comment."""
    return f"# 🤖 {bot_name}\n\n{summary}"


async def _post_summary_comment(
    deps: ReviewDependencies, config: ReviewConfig, summary: str
) -> None:
    await asyncio.to_thread(
        deps.review_sink.create_issue_comment,
        deps.owner,
        deps.repo,
        deps.pr_number,
        body=format_summary_comment(config.bot_name, summary),
    )
    logger.info("Posted review summary to PR")


async def _auto_approve_if_enabled(deps: ReviewDependencies, head_sha: str) -> bool:
    if deps.thread_inspector is None or deps.identity_provider is None:
        logger.warning(
            "Auto-approval enabled but no thread inspector or identity provider configured"
        )
        return False

    return await auto_approve_if_resolved(
        deps.review_sink,
        deps.identity_provider,
        deps.thread_inspector,
        deps.owner,
        deps.repo,
        deps.pr_number,
        commit_id=head_sha,
    )
