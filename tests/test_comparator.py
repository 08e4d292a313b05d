"""Tests for version normalization and comparison."""

import pytest

from version_matrix.core.comparator import (
    ComparisonOperator,
    compare,
    to_version_key,
    trim_version,
)
from version_matrix.core.exceptions import VersionParseError


class TestVersionNormalization:
    """Test qualifier stripping and segment conversion."""

    def test_trim_qualifier(self):
        """Test that a qualifier after '-' is removed."""
        assert trim_version("2.7.8-SNAPSHOT") == "2.7.8"
        assert trim_version("3.0.0-beta-1") == "3.0.0"
        assert trim_version("2.7.8") == "2.7.8"

    def test_leading_dash_is_kept(self):
        """Test that a leading '-' is not treated as a qualifier."""
        assert trim_version("-1.0") == "-1.0"

    def test_missing_segments_are_zero(self):
        """Test padding to four segments."""
        assert to_version_key("3") == (3, 0, 0, 0)
        assert to_version_key("2.7") == (2, 7, 0, 0)

    def test_extra_segments_are_ignored(self):
        """Test truncation to four segments."""
        assert to_version_key("1.2.3.4.5") == (1, 2, 3, 4)

    def test_empty_segments_are_skipped(self):
        """Test that repeated dots do not produce zero segments."""
        assert to_version_key("1..2") == (1, 2, 0, 0)

    @pytest.mark.parametrize("version", ["2.7.x", "v2.7", "2.7.8-SNAPSHOT"])
    def test_non_numeric_segment(self, version):
        """Test that non-numeric segments raise VersionParseError."""
        with pytest.raises(VersionParseError):
            to_version_key(version)


class TestCompare:
    """Test the comparison operators."""

    @pytest.mark.parametrize("left, right", [
        ("2.7.8", "2.7.8"),
        ("2.7.8", "2.7.8.0"),
        ("3", "3.0.0.0"),
        ("2.7.8-SNAPSHOT", "2.7.8"),
    ])
    def test_equal_versions(self, left, right):
        """Test that equal normalized versions satisfy >= and <= but not >."""
        assert compare(">=", left, right)
        assert compare("<=", left, right)
        assert compare("==", left, right)
        assert not compare(">", left, right)
        assert not compare("<", left, right)

    def test_numeric_not_lexicographic(self):
        """Test that segments compare as integers."""
        assert compare(">", "2.7.10", "2.7.9")
        assert compare("<", "2.7.9", "2.7.10")

    def test_most_significant_segment_decides(self):
        """Test that the first differing segment decides."""
        assert compare(">", "3.0", "2.99.99.99")
        assert not compare(">=", "2.99.99.99", "3.0")

    def test_operator_enum_and_keys(self):
        """Test comparing pre-normalized keys with an enum member."""
        assert compare(ComparisonOperator.LESS_THAN_OR_EQUAL, (2, 7, 6, 0), (2, 7, 7, 0))

    def test_operator_lookup(self):
        """Test operator lookup by symbol."""
        assert ComparisonOperator.from_symbol(">=") is ComparisonOperator.GREATER_THAN_OR_EQUAL
        assert ComparisonOperator.from_symbol(" < ") is ComparisonOperator.LESS_THAN

    def test_unknown_operator(self):
        """Test that an unknown operator is rejected."""
        with pytest.raises(ValueError, match="Comparison operator is invalid"):
            compare("!=", "1.0", "1.0")
