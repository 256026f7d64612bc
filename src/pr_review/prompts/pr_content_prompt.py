"""Prompts for rewriting a pull request's title and description."""

from collections.abc import Sequence

from pr_review.models.github_types import FileDiff

SYSTEM_PROMPT = " ".join(
    [
        "You are an expert software engineer and technical writer.",
        "Your task is to improve pull request titles and descriptions to be clear, concise, and informative.",
        "The title should follow conventional commit format when appropriate and clearly indicate the change.",
        "The description should include: what changed, why it changed, and any relevant context for reviewers.",
        "Focus on clarity and completeness while being concise.",
        'Always respond with valid JSON containing "title" and "description" fields.',
        "Do not include markdown code fences in your response.",
    ]
)

TRUNCATION_NOTE = "\n... (truncated)"


def create_content_system_prompt(
    custom_instructions: str = "", template: str | None = None
) -> str:
    """Return the system prompt for the title and description call.

    Args:
        custom_instructions: Extra instructions appended to the prompt
        template: Repository pull request template the description should follow

    Returns:
        Prompt text for the model
    """
    prompt = SYSTEM_PROMPT

    if custom_instructions.strip():
        prompt += f" Additional instructions: {custom_instructions.strip()}"

    if template and template.strip():
        prompt += (
            "\n\nStructure the description using this pull request template:\n"
            f"{template.strip()}"
        )

    return prompt


def build_content_user_prompt(
    title: str,
    description: str,
    files: Sequence[FileDiff],
    include_file_list: bool = False,
    max_patch_chars: int = 2000,
) -> str:
    """Build the user prompt carrying the current content and the changes.

    Each patch is cut to ``max_patch_chars`` characters.
    """
    prompt = f"Current PR Title: {title}\n\n"
    prompt += f"Current PR Description:\n{description or '(No description)'}\n\n"

    if include_file_list:
        listing = "\n".join(f"{file.status}: {file.filename}" for file in files)
        prompt += f"Changed Files:\n{listing}\n\n"

    prompt += "Code Changes:\n"
    for index, file in enumerate(files, start=1):
        patch = file.patch or ""
        prompt += f"\n--- File {index}: {file.filename} ({file.status}) ---\n"
        if len(patch) > max_patch_chars:
            prompt += patch[:max_patch_chars] + TRUNCATION_NOTE
        else:
            prompt += patch

    prompt += "\n\nPlease provide an improved title and description for this pull request."
    return prompt
