"""Unit tests for file admission filtering."""

from pr_review.models.github_types import FileDiff
from pr_review.utils.filters import (
    filter_files,
    parse_exclude_patterns,
    should_review_file,
)


def _files(*names: str) -> list[FileDiff]:
    return [FileDiff(filename=name, patch="@@ -1 +1 @@") for name in names]


class TestParseExcludePatterns:
    """Tests for parse_exclude_patterns()."""

    def test_splits_and_trims(self):
        """Test patterns are split on commas and trimmed."""
        assert parse_exclude_patterns(" *.md , *.txt,docs/** ") == [
            "*.md",
            "*.txt",
            "docs/**",
        ]

    def test_drops_empty_entries(self):
        """Test blank entries are ignored."""
        assert parse_exclude_patterns("*.md,, ,") == ["*.md"]

    def test_empty_string(self):
        """Test an empty string yields no patterns."""
        assert parse_exclude_patterns("") == []


class TestShouldReviewFile:
    """Tests for should_review_file()."""

    def test_excluded_file(self):
        """Test a matching file is excluded."""
        assert should_review_file("README.md", "*.md,*.txt") is False

    def test_admitted_file(self):
        """Test a non-matching file is admitted."""
        assert should_review_file("src/app.py", "*.md,*.txt") is True


class TestFilterFiles:
    """Tests for filter_files()."""

    def test_glob_anchoring_avoids_substring_match(self):
        """Test *.json excludes config.json but keeps config.json.ts."""
        result = filter_files(_files("config.json", "config.json.ts"), "*.json", 10)

        assert [f.filename for f in result] == ["config.json.ts"]

    def test_default_exclusions(self):
        """Test the default exclusion list against a typical PR."""
        files = _files("src/app.ts", "README.md", "notes.txt", "package.json", "ci.yml", "a.yaml")

        result = filter_files(files, "*.md,*.txt,*.json,*.yml,*.yaml", 10)

        assert [f.filename for f in result] == ["src/app.ts"]

    def test_truncates_preserving_order(self):
        """Test the result is capped at max_files in input order."""
        files = _files("c.py", "a.py", "b.py", "d.py")

        result = filter_files(files, "", 2)

        assert [f.filename for f in result] == ["c.py", "a.py"]

    def test_cap_applies_after_exclusion(self):
        """Test excluded files don't count towards max_files."""
        files = _files("README.md", "a.py", "CHANGELOG.md", "b.py")

        result = filter_files(files, "*.md", 2)

        assert [f.filename for f in result] == ["a.py", "b.py"]

    def test_empty_pattern_list_admits_everything(self):
        """Test no patterns means no exclusions."""
        files = _files("a.md", "b.json")

        assert filter_files(files, " , ", 10) == files

    def test_non_positive_max_files(self):
        """Test a zero cap admits nothing."""
        assert filter_files(_files("a.py"), "", 0) == []

    def test_star_does_not_cross_directories(self):
        """Test *.md leaves nested markdown files alone."""
        result = filter_files(_files("README.md", "docs/guide.md"), "*.md", 10)

        assert [f.filename for f in result] == ["docs/guide.md"]
