"""Prompts for the per-file code review model call."""

DEFAULT_REVIEW_FOCUS = (
    "Focus on correctness, code quality, security, performance, test coverage, "
    "and best practices. Provide actionable, line-specific feedback whenever possible."
)

SYSTEM_PROMPT = """
Role: Senior engineer reviewing a single file of a pull request diff.

Respond with ONE JSON object and nothing else:

{
  "file_overview": "One or two sentences on what changed in this file.",
  "summary_points": ["Key observation", "..."],
  "positive_insights": ["Something done well", "..."],
  "risks": ["Possible regression or risk", "..."],
  "inline_comments": [
    {
      "line": 42,
      "title": "Short headline",
      "comment": "What is wrong and why it matters.",
      "recommendation": "Concrete fix.",
      "severity": "info | low | medium | high",
      "rule_id": "optional-stable-rule-identifier"
    }
  ]
}

Rules:
- "line" is the line number in the NEW version of the file and must be a line
  visible in the diff.
- Only comment on real issues; leave "inline_comments" empty when there are none.
- Use "high" only for bugs, security flaws, or data loss.
- If you cannot produce JSON, write one comment per issue prefixed with
  "Line <number>:".
""".strip()


def create_system_prompt() -> str:
    """Return the system prompt for the per-file review call."""
    return SYSTEM_PROMPT


def build_user_prompt(filename: str, diff: str, review_focus: str) -> str:
    """Build the user prompt carrying one file's diff.

    Args:
        filename: Path of the file under review
        diff: Unified diff patch for the file
        review_focus: Reviewer instructions for this run

    Returns:
        Prompt text for the model
    """
    focus = review_focus.strip() or DEFAULT_REVIEW_FOCUS
    return (
        f"{focus}\n\n"
        f"File: {filename}\n\n"
        f"Diff:\n```diff\n{diff}\n```"
    )
