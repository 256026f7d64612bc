"""Interpretation of model review responses into summaries and inline comments.

Responses are read as a structured JSON document first. Models that ignore
the JSON contract are handled by a line-oriented fallback that looks for
``Line 42:`` / ``L42:`` markers. Malformed input never raises; it degrades
to a single general comment on line 1.
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from pr_review.models.outputs import (
    ParsedReviewData,
    ReviewComment,
    StructuredInlineComment,
    StructuredReviewResponse,
)
from pr_review.utils.severity import format_severity

logger = logging.getLogger(__name__)

LINE_MARKER_PATTERN = re.compile(r"\b(?:Line|L)\s*(\d+):?")
FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]+?)```", re.IGNORECASE)

# Line used for comments that don't target a specific line
GENERAL_COMMENT_LINE = 1


def _parse_line_number(digits: str) -> int | None:
    # int() refuses digit runs beyond sys.get_int_max_str_digits()
    try:
        return int(digits)
    except ValueError:
        logger.debug(f"Ignoring line marker with {len(digits)} digit line number")
        return None


def parse_review_for_comments(review_text: str, filename: str) -> list[ReviewComment]:
    """Extract line-specific comments from free-form review text.

    A line containing ``Line <n>`` or ``L<n>`` at a word boundary (optionally
    followed by a colon) starts a new comment; following lines are appended
    to it until the next marker. Markers whose number can't be read leave
    the text unattached. When no marker is found, the whole text becomes one
    general comment on line 1.

    Args:
        review_text: Raw model response
        filename: Path the comments are attached to

    Returns:
        Comments in the order they appear in the text
    """
    comments: list[ReviewComment] = []
    current_lines: list[str] = []
    target_line: int | None = None

    def flush() -> None:
        body = "\n".join(current_lines).strip()
        if body and target_line:
            comments.append(ReviewComment.create(filename, target_line, body))

    for line in review_text.split("\n"):
        match = LINE_MARKER_PATTERN.search(line)

        if match:
            flush()
            target_line = _parse_line_number(match.group(1))
            current_lines = [LINE_MARKER_PATTERN.sub("", line, count=1).strip()]
        elif target_line:
            current_lines.append(line)

    flush()

    if not comments and review_text.strip():
        comments.append(
            ReviewComment.create(filename, GENERAL_COMMENT_LINE, review_text.strip())
        )

    return comments


def try_parse_structured_review(review_text: str) -> StructuredReviewResponse | None:
    """Decode a structured review document, or return None.

    Accepts a bare JSON object or one wrapped in a fenced code block.
    Arrays, scalars, undecodable text and documents too deeply nested or
    with oversized numbers all yield None.
    """
    if not review_text:
        return None

    trimmed = review_text.strip()
    fenced = FENCED_BLOCK_PATTERN.search(trimmed)
    candidate = fenced.group(1).strip() if fenced else trimmed

    if not candidate.startswith("{"):
        return None

    try:
        parsed: Any = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Review response is not valid JSON, using text parsing: {e}")
        return None

    if not isinstance(parsed, dict):
        return None

    try:
        return StructuredReviewResponse.model_validate(parsed)
    except ValidationError as e:
        logger.debug(f"Structured review did not validate, using text parsing: {e}")
        return None


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item.strip()}" for item in items if item.strip())


def build_structured_summary(structured: StructuredReviewResponse) -> str:
    """Render the summary sections of a structured review as markdown."""
    sections: list[str] = []

    if structured.file_overview and structured.file_overview.strip():
        sections.append(structured.file_overview.strip())

    if points := _bullets(structured.summary_points):
        sections.append(points)

    if positives := _bullets(structured.positive_insights):
        sections.append(f"**Positive notes**\n{positives}")

    if risks := _bullets(structured.risks):
        sections.append(f"**Risks & regressions**\n{risks}")

    return "\n\n".join(sections).strip()


def _render_inline_comment(comment: StructuredInlineComment) -> str:
    parts: list[str] = []

    if comment.title and comment.title.strip():
        parts.append(f"**{comment.title.strip()}**")
    if comment.comment and comment.comment.strip():
        parts.append(comment.comment.strip())
    if comment.recommendation and comment.recommendation.strip():
        parts.append(f"_Recommendation:_ {comment.recommendation.strip()}")
    if comment.severity and comment.severity.strip():
        parts.append(format_severity(comment.severity))

    return "\n\n".join(parts).strip()


def convert_structured_comments(
    inline_comments: list[dict[str, Any]], filename: str
) -> list[ReviewComment]:
    """Turn structured inline comment entries into review comments.

    Entries need a positive integer ``line`` and a non-empty ``comment``;
    anything else is dropped.
    """
    comments: list[ReviewComment] = []

    for raw in inline_comments:
        try:
            entry = StructuredInlineComment.model_validate(raw)
        except ValidationError:
            logger.debug(f"Dropping malformed inline comment for {filename}: {raw!r}")
            continue

        if entry.line <= 0 or not (entry.comment and entry.comment.strip()):
            continue

        body = _render_inline_comment(entry)
        if not body:
            continue

        comments.append(
            ReviewComment.create(filename, entry.line, body, rule_id=entry.rule_id)
        )

    return comments


def parse_review_response(review_text: str, filename: str) -> ParsedReviewData:
    """Interpret one model response for one file.

    Structured responses contribute their rendered summary and inline
    comments. If a structured response has no usable inline comments, the
    comments come from the text parser while the structured summary is kept.
    Anything that isn't a JSON object is handled entirely by the text parser,
    with the trimmed response as the summary.

    Args:
        review_text: Raw model response
        filename: Path of the reviewed file

    Returns:
        Parsed summary and comments
    """
    structured = try_parse_structured_review(review_text)

    if structured is not None:
        summary = build_structured_summary(structured) or review_text.strip()
        comments = convert_structured_comments(structured.inline_comments, filename)
        if not comments:
            logger.debug(
                f"Structured review for {filename} had no inline comments, "
                "falling back to text parsing"
            )
            comments = parse_review_for_comments(review_text, filename)
        return ParsedReviewData(summary=summary, comments=comments)

    return ParsedReviewData(
        summary=review_text.strip(),
        comments=parse_review_for_comments(review_text, filename),
    )
