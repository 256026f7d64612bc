"""Severity markers embedded in rendered review comments.

The review surface only accepts a body string, so severity travels inside
the body as a trailing marker line:

    _Severity:_ 🔥 high — see https://.../pr-review#severity-levels

The filter reads the level word back out of that line.
"""

import logging
import re
from collections.abc import Sequence
from enum import IntEnum

from pr_review.models.outputs import ReviewComment

logger = logging.getLogger(__name__)

SEVERITY_DOC_URL = (
    "https://github.com/niko0xdev/action-code-review/tree/main/pr-review#severity-levels"
)


class Severity(IntEnum):
    """Ordered severity levels."""

    INFO = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @classmethod
    def parse(cls, value: str | None) -> "Severity | None":
        """Map a level name to a Severity, or None if it isn't one."""
        if not value:
            return None
        try:
            return cls[value.strip().upper()]
        except KeyError:
            return None

    @property
    def icon(self) -> str:
        """Emoji shown in front of the level name."""
        return SEVERITY_ICONS[self]


SEVERITY_ICONS: dict[Severity, str] = {
    Severity.INFO: "ℹ️",
    Severity.LOW: "✅",
    Severity.MEDIUM: "⚠️",
    Severity.HIGH: "🔥",
}

# The level word may be preceded by an icon, which is not part of the word
SEVERITY_MARKER_PATTERN = re.compile(r"_Severity:_\s*(?:[^\sA-Za-z]+\s*)?([A-Za-z]+)")


def format_severity(severity: str, doc_url: str = SEVERITY_DOC_URL) -> str:
    """Render the severity marker line for a comment body.

    Args:
        severity: Level name as given by the model (any case)
        doc_url: Link explaining the severity levels

    Returns:
        Marker line; unknown levels are rendered without an icon
    """
    normalized = severity.strip().lower()
    level = Severity.parse(normalized)
    prefix = f"{level.icon} " if level is not None else ""
    return f"_Severity:_ {prefix}{normalized} — see {doc_url}"


def extract_severity(body: str) -> Severity | None:
    """Read the severity level from the first marker in ``body``."""
    match = SEVERITY_MARKER_PATTERN.search(body)
    if not match:
        return None
    return Severity.parse(match.group(1))


def filter_comments_by_severity(
    comments: Sequence[ReviewComment], min_severity: str
) -> list[ReviewComment]:
    """Keep comments at or above a minimum severity.

    An unknown threshold falls back to ``info`` and keeps everything.
    Comments without a recognizable marker count as ``info``, so they only
    survive the ``info`` threshold.

    Args:
        comments: Comments in delivery order
        min_severity: Threshold level name (case-insensitive)

    Returns:
        Surviving comments in their original order
    """
    threshold = Severity.parse((min_severity or "").lower())
    if threshold is None:
        if min_severity and min_severity.strip():
            logger.warning(
                f"Unknown minimum severity '{min_severity}', keeping all comments"
            )
        threshold = Severity.INFO

    kept = [
        comment
        for comment in comments
        if (extract_severity(comment.body) or Severity.INFO) >= threshold
    ]

    if len(kept) < len(comments):
        logger.info(
            f"Severity filter '{threshold.name.lower()}' kept "
            f"{len(kept)} of {len(comments)} comments"
        )
    return kept
