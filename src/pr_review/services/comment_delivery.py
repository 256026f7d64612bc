"""Delivery of review comments to a pull request.

Comments are posted one file at a time. Each file group moves through up to
three tiers:

    BATCH          one review carrying every comment of the file
    PER_COMMENT    one inline review comment per record, if the batch failed
    ISSUE_FALLBACK a plain PR comment, for records whose inline post failed

A failure in any tier is logged and never propagates, so one bad record
(for example a line outside the diff hunk) cannot stop delivery of the rest.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pr_review.models.github_types import ReviewThread
from pr_review.models.outputs import ReviewComment
from pr_review.models.protocols import IdentityProvider, ReviewSink, ThreadInspector
from pr_review.utils.comment_identity import append_identity_marker

logger = logging.getLogger(__name__)

REVIEW_SIDE = "RIGHT"
APPROVAL_BODY = "All review threads opened by the AI reviewer are resolved. Approving."


class DeliveryTier(str, Enum):
    """Delivery strategies, in the order they are attempted."""

    BATCH = "batch"
    PER_COMMENT = "per_comment"
    ISSUE_FALLBACK = "issue_fallback"


@dataclass
class DeliveryReport:
    """Counts of how each comment ended up being delivered."""

    batched: int = 0
    individual: int = 0
    fallback: int = 0
    dropped: int = 0

    @property
    def delivered(self) -> int:
        """Number of comments that reached the pull request in any form."""
        return self.batched + self.individual + self.fallback

    def record(self, tier: DeliveryTier, count: int = 1) -> None:
        """Count ``count`` comments as delivered through ``tier``."""
        if tier is DeliveryTier.BATCH:
            self.batched += count
        elif tier is DeliveryTier.PER_COMMENT:
            self.individual += count
        else:
            self.fallback += count


def group_comments_by_file(
    comments: Sequence[ReviewComment],
) -> dict[str, list[ReviewComment]]:
    """Group comments by path.

    Groups follow the order in which each path first appears and keep the
    original comment order within a group.
    """
    groups: dict[str, list[ReviewComment]] = {}
    for comment in comments:
        groups.setdefault(comment.path, []).append(comment)
    return groups


def build_review_records(
    comments: Sequence[ReviewComment], commit_id: str
) -> list[dict[str, Any]]:
    """Build the wire records for a file group, identity marker included."""
    return [
        {
            "body": append_identity_marker(comment.body, comment.id),
            "path": comment.path,
            "line": comment.line,
            "side": REVIEW_SIDE,
            "commit_id": commit_id,
        }
        for comment in comments
    ]


def format_fallback_comment(record: dict[str, Any]) -> str:
    """Render a record as a plain PR comment when it can't be posted inline."""
    return f"**{record['path']}** (line {record['line']})\n\n{record['body']}"


def _deliver_batch(
    sink: ReviewSink,
    owner: str,
    repo: str,
    pr_number: int,
    filename: str,
    records: list[dict[str, Any]],
    commit_id: str,
) -> bool:
    try:
        sink.create_review(
            owner,
            repo,
            pr_number,
            comments=records,
            event="COMMENT",
            commit_id=commit_id,
        )
    except Exception as e:
        logger.error(f"Failed to post batched review for {filename}: {e}")
        return False

    logger.info(f"Posted {len(records)} comments for {filename} in one review")
    return True


def _deliver_individually(
    sink: ReviewSink, owner: str, repo: str, pr_number: int, record: dict[str, Any]
) -> bool:
    try:
        sink.create_review_comment(
            owner,
            repo,
            pr_number,
            body=record["body"],
            commit_id=record["commit_id"],
            path=record["path"],
            side=record["side"],
            line=record["line"],
        )
    except Exception as e:
        logger.warning(
            f"Failed to post inline comment on {record['path']}:{record['line']}: {e}"
        )
        return False

    logger.debug(f"Posted comment on {record['path']}:{record['line']}")
    return True


def _deliver_issue_fallback(
    sink: ReviewSink, owner: str, repo: str, pr_number: int, record: dict[str, Any]
) -> bool:
    try:
        sink.create_issue_comment(
            owner, repo, pr_number, body=format_fallback_comment(record)
        )
    except Exception as e:
        logger.error(
            f"Dropping comment on {record['path']}:{record['line']}, "
            f"issue comment fallback failed: {e}"
        )
        return False

    logger.info(
        f"Posted comment on {record['path']}:{record['line']} as a PR comment"
    )
    return True


async def deliver_file_group(
    sink: ReviewSink,
    owner: str,
    repo: str,
    pr_number: int,
    filename: str,
    comments: Sequence[ReviewComment],
    commit_id: str,
    report: DeliveryReport | None = None,
) -> DeliveryReport:
    """Deliver one file's comments, stepping down tiers as calls fail."""
    report = report if report is not None else DeliveryReport()
    records = build_review_records(comments, commit_id)

    if await asyncio.to_thread(
        _deliver_batch, sink, owner, repo, pr_number, filename, records, commit_id
    ):
        report.record(DeliveryTier.BATCH, len(records))
        return report

    for record in records:
        if await asyncio.to_thread(
            _deliver_individually, sink, owner, repo, pr_number, record
        ):
            report.record(DeliveryTier.PER_COMMENT)
        elif await asyncio.to_thread(
            _deliver_issue_fallback, sink, owner, repo, pr_number, record
        ):
            report.record(DeliveryTier.ISSUE_FALLBACK)
        else:
            report.dropped += 1

    return report


async def post_comments_to_pr(
    sink: ReviewSink,
    owner: str,
    repo: str,
    pr_number: int,
    comments: Sequence[ReviewComment],
    commit_id: str,
) -> DeliveryReport:
    """Post review comments to a pull request, one file group at a time.

    Args:
        sink: Review surface to write to
        owner: Repository owner
        repo: Repository name
        pr_number: Pull request number
        comments: Comments in delivery order
        commit_id: Head commit the comments are anchored to

    Returns:
        DeliveryReport with per-tier counts
    """
    report = DeliveryReport()

    for filename, file_comments in group_comments_by_file(comments).items():
        await deliver_file_group(
            sink, owner, repo, pr_number, filename, file_comments, commit_id, report
        )

    logger.info(
        f"Delivered {report.delivered} of {len(comments)} comments to "
        f"{owner}/{repo}#{pr_number} (batched={report.batched}, "
        f"individual={report.individual}, fallback={report.fallback}, "
        f"dropped={report.dropped})"
    )
    return report


def should_auto_approve(threads: Sequence[ReviewThread], login: str) -> bool:
    """Decide whether every review thread opened by ``login`` is resolved.

    Returns False when ``login`` has no threads at all.
    """
    ai_threads = [thread for thread in threads if thread.has_author(login)]
    if not ai_threads:
        logger.info(f"No review threads by {login}; not approving")
        return False

    unresolved = sum(1 for thread in ai_threads if not thread.is_resolved)
    if unresolved:
        logger.info(
            f"{unresolved} of {len(ai_threads)} review threads by {login} "
            "are unresolved; not approving"
        )
        return False

    return True


async def auto_approve_if_resolved(
    sink: ReviewSink,
    identity: IdentityProvider,
    thread_inspector: ThreadInspector,
    owner: str,
    repo: str,
    pr_number: int,
    commit_id: str | None = None,
) -> bool:
    """Approve the pull request once all of the bot's threads are resolved.

    Any error along the way is logged and treated as "do not approve".

    Returns:
        True if an approving review was submitted
    """
    try:
        login = await asyncio.to_thread(identity.get_login)
        threads = await thread_inspector.list_review_threads(owner, repo, pr_number)

        if not should_auto_approve(threads, login):
            return False

        await asyncio.to_thread(
            sink.create_review,
            owner,
            repo,
            pr_number,
            comments=[],
            event="APPROVE",
            commit_id=commit_id,
            body=APPROVAL_BODY,
        )
    except Exception as e:
        logger.error(f"Auto-approval check failed for {owner}/{repo}#{pr_number}: {e}")
        return False

    logger.info(f"Approved {owner}/{repo}#{pr_number}")
    return True
