"""Unit tests for the dependency and configuration models."""

from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from pr_review.models.dependencies import (
    ContentConfig,
    ContentDependencies,
    ReviewConfig,
    ReviewDependencies,
)


class TestReviewDependencies:
    """Test suite for ReviewDependencies model."""

    @pytest.fixture
    def collaborators(self) -> dict[str, Mock]:
        """Create mock collaborators for testing."""
        return {"diff_source": Mock(), "model_client": Mock(), "review_sink": Mock()}

    def test_create_valid_review_dependencies(self, collaborators) -> None:
        """Test creating a valid ReviewDependencies instance."""
        deps = ReviewDependencies(repo_full_name="owner/repo", pr_number=123, **collaborators)

        assert deps.review_sink is collaborators["review_sink"]
        assert deps.thread_inspector is None
        assert deps.identity_provider is None
        assert deps.owner == "owner"
        assert deps.repo == "repo"

    @pytest.mark.parametrize(
        "name", ["owner/repo", "Osireg17/AI-Code-Reviewer", "facebook/react"]
    )
    def test_repo_full_name_with_slash(self, collaborators, name) -> None:
        """Test valid repo_full_name formats."""
        deps = ReviewDependencies(repo_full_name=name, pr_number=1, **collaborators)

        assert deps.repo_full_name == name

    @pytest.mark.parametrize("name", ["", "   ", "noslash", "a/b/c", "/repo", "owner/"])
    def test_invalid_repo_full_name(self, collaborators, name) -> None:
        """Test invalid repo_full_name values are rejected."""
        with pytest.raises(ValidationError):
            ReviewDependencies(repo_full_name=name, pr_number=1, **collaborators)

    @pytest.mark.parametrize("pr_number", [0, -1])
    def test_invalid_pr_number(self, collaborators, pr_number) -> None:
        """Test pr_number must be positive."""
        with pytest.raises(ValidationError, match="pr_number must be positive"):
            ReviewDependencies(repo_full_name="owner/repo", pr_number=pr_number, **collaborators)


class TestReviewConfig:
    """Test suite for ReviewConfig model."""

    def test_defaults(self) -> None:
        """Test default configuration values."""
        config = ReviewConfig()

        assert config.max_files == 10
        assert config.exclude_patterns == "*.md,*.txt,*.json,*.yml,*.yaml"
        assert config.min_severity == "info"
        assert config.auto_approve is False

    def test_is_immutable(self) -> None:
        """Test configuration can't be changed after creation."""
        config = ReviewConfig()

        with pytest.raises(ValidationError):
            config.max_files = 3


class TestContentDependencies:
    """Test suite for ContentDependencies model."""

    def test_create_valid_content_dependencies(self) -> None:
        """Test the editor is held alongside the shared coordinates."""
        editor = Mock()

        deps = ContentDependencies(
            repo_full_name="owner/repo",
            pr_number=7,
            diff_source=Mock(),
            model_client=Mock(),
            editor=editor,
        )

        assert deps.editor is editor
        assert (deps.owner, deps.repo) == ("owner", "repo")

    def test_shares_coordinate_validation(self) -> None:
        """Test the owner/repo and PR number rules apply here too."""
        with pytest.raises(ValidationError):
            ContentDependencies(
                repo_full_name="noslash",
                pr_number=0,
                diff_source=Mock(),
                model_client=Mock(),
                editor=Mock(),
            )


class TestContentConfig:
    """Test suite for ContentConfig model."""

    def test_defaults(self) -> None:
        """Test the default template path and patch limit."""
        config = ContentConfig()

        assert config.template_path == ".github/pull_request_template.md"
        assert config.max_patch_chars == 2000
        assert config.include_file_list is False

    def test_is_frozen(self) -> None:
        """Test the configuration can't be changed after creation."""
        config = ContentConfig()

        with pytest.raises(ValidationError):
            config.include_file_list = True
