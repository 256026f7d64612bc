"""Unit tests for applying a proposed title and description."""

import json
from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from pr_review.models.outputs import PRContentUpdate, PullRequestDetails
from pr_review.services.content_updater import (
    ContentParseError,
    needs_update,
    parse_content_update,
    update_pull_request_content,
)

PROPOSAL = {"title": "feat: add request cache", "description": "Caches GET responses."}


@pytest.fixture
def editor() -> Mock:
    """Return a mock editor for a PR with an outdated title."""
    pr_editor = Mock()
    pr_editor.get_details.return_value = PullRequestDetails(title="wip", body="")
    pr_editor.update_content.return_value = None
    return pr_editor


class TestParseContentUpdate:
    """Tests for parse_content_update()."""

    def test_bare_json(self):
        """Test a bare JSON object is read."""
        update = parse_content_update(json.dumps(PROPOSAL))

        assert update.title == "feat: add request cache"
        assert update.description == "Caches GET responses."

    def test_object_inside_text(self):
        """Test the object is extracted from surrounding prose or fences."""
        text = f"Here you go:\n```json\n{json.dumps(PROPOSAL)}\n```\nHope this helps."

        update = parse_content_update(text)

        assert update.title == "feat: add request cache"

    def test_extra_keys_are_ignored(self):
        """Test unknown keys don't reject the document."""
        update = parse_content_update(json.dumps({**PROPOSAL, "labels": ["cache"]}))

        assert update == PRContentUpdate(**PROPOSAL)

    def test_no_json(self):
        """Test prose without an object raises ContentParseError."""
        with pytest.raises(ContentParseError, match="Failed to parse AI response as JSON"):
            parse_content_update("I would call it 'add cache'.")

    def test_broken_object(self):
        """Test an undecodable object raises ContentParseError."""
        with pytest.raises(ContentParseError):
            parse_content_update('Sure: {"title": "x", "description": }')

    def test_deeply_nested_document(self):
        """Test nesting past the recursion limit raises ContentParseError."""
        with pytest.raises(ContentParseError):
            parse_content_update('{"a": ' + "[" * 100000 + "]" * 100000 + "}")

    @pytest.mark.parametrize(
        "document",
        [
            {"title": "feat: add cache"},
            {"description": "Adds a cache."},
            {"title": "", "description": "Adds a cache."},
            {"title": "feat: add cache", "description": "   "},
        ],
    )
    def test_missing_fields(self, document):
        """Test a proposal without both title and description is rejected."""
        with pytest.raises(ValidationError):
            parse_content_update(json.dumps(document))


class TestNeedsUpdate:
    """Tests for needs_update()."""

    def test_identical_content(self):
        """Test an unchanged proposal needs no edit."""
        current = PullRequestDetails(title=PROPOSAL["title"], body=PROPOSAL["description"])

        assert needs_update(current, PRContentUpdate(**PROPOSAL)) is False

    def test_title_differs(self):
        """Test a new title needs an edit."""
        current = PullRequestDetails(title="wip", body=PROPOSAL["description"])

        assert needs_update(current, PRContentUpdate(**PROPOSAL)) is True

    def test_description_differs(self):
        """Test a new description needs an edit."""
        current = PullRequestDetails(title=PROPOSAL["title"])

        assert needs_update(current, PRContentUpdate(**PROPOSAL)) is True


class TestUpdatePullRequestContent:
    """Tests for update_pull_request_content()."""

    @pytest.mark.asyncio
    async def test_applies_changed_content(self, editor):
        """Test a differing proposal is written to the pull request."""
        updated = await update_pull_request_content(
            editor, "octo", "hello", 42, json.dumps(PROPOSAL)
        )

        assert updated is True
        editor.get_details.assert_called_once_with("octo", "hello", 42)
        editor.update_content.assert_called_once_with(
            "octo",
            "hello",
            42,
            title="feat: add request cache",
            body="Caches GET responses.",
        )

    @pytest.mark.asyncio
    async def test_unchanged_content_is_not_written(self, editor):
        """Test no edit is made when the proposal matches the pull request."""
        editor.get_details.return_value = PullRequestDetails(
            title=PROPOSAL["title"], body=PROPOSAL["description"]
        )

        updated = await update_pull_request_content(
            editor, "octo", "hello", 42, json.dumps(PROPOSAL)
        )

        assert updated is False
        editor.update_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_response_raises(self, editor):
        """Test a response without JSON raises before GitHub is touched."""
        with pytest.raises(ContentParseError):
            await update_pull_request_content(editor, "octo", "hello", 42, "no json")

        editor.get_details.assert_not_called()
        editor.update_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_edit_failure_propagates(self, editor):
        """Test a failing edit is raised to the caller."""
        editor.update_content.side_effect = Exception("403 Forbidden")

        with pytest.raises(Exception, match="403 Forbidden"):
            await update_pull_request_content(
                editor, "octo", "hello", 42, json.dumps(PROPOSAL)
            )
