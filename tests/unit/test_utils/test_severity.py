"""Unit tests for severity markers and filtering."""

import pytest

from pr_review.models.outputs import ReviewComment
from pr_review.utils.severity import (
    SEVERITY_DOC_URL,
    Severity,
    extract_severity,
    filter_comments_by_severity,
    format_severity,
)


class TestFormatSeverity:
    """Tests for format_severity()."""

    @pytest.mark.parametrize(
        "level,icon",
        [("info", "ℹ️"), ("low", "✅"), ("medium", "⚠️"), ("high", "🔥")],
    )
    def test_known_levels(self, level, icon):
        """Test each level renders with its icon and the doc link."""
        assert format_severity(level) == f"_Severity:_ {icon} {level} — see {SEVERITY_DOC_URL}"

    def test_normalizes_case(self):
        """Test the level is lower-cased."""
        assert format_severity("HIGH") == f"_Severity:_ 🔥 high — see {SEVERITY_DOC_URL}"

    def test_unknown_level_has_no_icon(self):
        """Test unknown levels render without an icon."""
        assert format_severity("critical") == f"_Severity:_ critical — see {SEVERITY_DOC_URL}"


class TestExtractSeverity:
    """Tests for extract_severity()."""

    def test_reads_level_after_icon(self):
        """Test the level is read from a rendered marker."""
        body = "Problem\n\n" + format_severity("medium")

        assert extract_severity(body) is Severity.MEDIUM

    def test_reads_level_without_icon(self):
        """Test a plain marker is read too."""
        assert extract_severity("_Severity:_ low") is Severity.LOW

    def test_uses_first_marker(self):
        """Test only the first marker counts."""
        body = f"{format_severity('high')}\n{format_severity('info')}"

        assert extract_severity(body) is Severity.HIGH

    def test_no_marker(self):
        """Test bodies without a marker yield None."""
        assert extract_severity("Looks fine") is None

    def test_unknown_level(self):
        """Test unknown level words yield None."""
        assert extract_severity(format_severity("critical")) is None


class TestFilterCommentsBySeverity:
    """Tests for filter_comments_by_severity()."""

    def test_high_threshold(self, mixed_severity_comments):
        """Test 'high' keeps only the high comment."""
        result = filter_comments_by_severity(mixed_severity_comments, "high")

        assert [c.id for c in result] == ["4"]

    def test_medium_threshold(self, mixed_severity_comments):
        """Test 'medium' keeps medium and high."""
        result = filter_comments_by_severity(mixed_severity_comments, "medium")

        assert [c.id for c in result] == ["3", "4"]

    def test_low_threshold(self, mixed_severity_comments):
        """Test 'low' keeps low, medium and high."""
        result = filter_comments_by_severity(mixed_severity_comments, "low")

        assert [c.id for c in result] == ["2", "3", "4"]

    def test_info_threshold_keeps_everything(self, mixed_severity_comments):
        """Test 'info' keeps all comments including the unlabeled one."""
        result = filter_comments_by_severity(mixed_severity_comments, "info")

        assert [c.id for c in result] == ["1", "2", "3", "4", "5"]

    @pytest.mark.parametrize("threshold", ["invalid", "", "critical"])
    def test_unknown_threshold_defaults_to_info(self, mixed_severity_comments, threshold):
        """Test unknown thresholds keep everything."""
        result = filter_comments_by_severity(mixed_severity_comments, threshold)

        assert len(result) == 5

    def test_threshold_is_case_insensitive(self, mixed_severity_comments):
        """Test 'HIGH' behaves like 'high'."""
        result = filter_comments_by_severity(mixed_severity_comments, "HIGH")

        assert [c.id for c in result] == ["4"]

    def test_does_not_mutate_comments(self, mixed_severity_comments):
        """Test surviving comments are the original objects, unchanged."""
        bodies = [c.body for c in mixed_severity_comments]

        result = filter_comments_by_severity(mixed_severity_comments, "medium")

        assert result[0] is mixed_severity_comments[2]
        assert [c.body for c in mixed_severity_comments] == bodies

    def test_unlabeled_dropped_above_info(self):
        """Test comments without a marker only survive the info threshold."""
        comments = [ReviewComment.create("a.py", 1, "No marker here")]

        assert filter_comments_by_severity(comments, "low") == []
        assert filter_comments_by_severity(comments, "info") == comments
