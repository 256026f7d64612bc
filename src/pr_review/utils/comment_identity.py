"""Content-derived identifiers for review comments.

Every posted comment ends with a hidden marker carrying its identifier,
so a later run can tell whether the same comment already exists:

    Consider guarding against ``None`` here.

    <!-- ai-review-id:3f2a9c01b7de -->
"""

import hashlib
import re

ID_LENGTH = 12

IDENTITY_MARKER_PATTERN = re.compile(r"<!--\s*ai-review-id:([0-9a-f]+)\s*-->")


def build_comment_id(
    path: str, line: int, body: str, rule_id: str | None = None
) -> str:
    """Derive a stable identifier for a comment.

    Surrounding whitespace of ``body`` and ``rule_id`` is ignored; any other
    difference in the four fields yields a different identifier.

    Args:
        path: File the comment is attached to
        line: Line number the comment targets
        body: Rendered comment text
        rule_id: Optional identifier of the rule that produced the comment

    Returns:
        First 12 hex characters of the SHA-256 digest
    """
    key = "|".join([path, str(line), body.strip(), (rule_id or "").strip()])
    return hashlib.sha256(key.encode("utf-8")).hexdigest()[:ID_LENGTH]


def build_identity_marker(comment_id: str) -> str:
    """Render the hidden HTML marker for ``comment_id``."""
    return f"<!-- ai-review-id:{comment_id} -->"


def has_identity_marker(body: str) -> bool:
    """Check whether a body already carries an identity marker."""
    return IDENTITY_MARKER_PATTERN.search(body) is not None


def extract_comment_id(body: str) -> str | None:
    """Return the identifier embedded in ``body``, if any."""
    if not body:
        return None
    match = IDENTITY_MARKER_PATTERN.search(body)
    return match.group(1) if match else None


def append_identity_marker(body: str, comment_id: str) -> str:
    """Append the identity marker unless the body already has one."""
    if has_identity_marker(body):
        return body
    return f"{body}\n\n{build_identity_marker(comment_id)}"
