"""Tests for rule file and candidate version parsers."""

import pytest

from version_matrix.core.comparator import ComparisonOperator
from version_matrix.core.exceptions import InputError, RuleSyntaxError
from version_matrix.core.parsers import (
    CandidateVersionParser,
    RuleFileParser,
    parse_candidate_versions,
    parse_pattern,
    parse_range_rule,
    parse_rules,
)
from version_matrix.core.rules import CombinedRangeRule, PlainRule, RangeRule, WildcardRule


GT = ComparisonOperator.GREATER_THAN
GE = ComparisonOperator.GREATER_THAN_OR_EQUAL
LT = ComparisonOperator.LESS_THAN
LE = ComparisonOperator.LESS_THAN_OR_EQUAL


@pytest.fixture
def temp_rules_file(tmp_path):
    """Create a temporary case versions rule file."""
    rules_file = tmp_path / "case-versions.conf"
    rules_file.write_text(
        "# Versions used by this case\n"
        "\n"
        "dubbo.version=2.7*, 3.*, !2.7.8*, !2.7.8.1\n"
        "spring.version=[<=4.3.30, >=5.1]\n"
    )
    return rules_file


class TestRuleFileParser:
    """Test the case versions rule file parser."""

    def test_parse_wildcard_and_exclusions(self):
        """Test parsing wildcard, plain and excluded patterns."""
        rules = parse_rules("dubbo.version=2.7*, 3.*, !2.7.8*, !2.7.8.1")

        assert rules == {
            "dubbo.version": [
                WildcardRule("2.7*"),
                WildcardRule("3.*"),
                WildcardRule("2.7.8*", excluded=True),
                PlainRule("2.7.8.1", excluded=True),
            ]
        }

    @pytest.mark.parametrize("line", [
        "dubbo=<=2.7.7, >2.7.8, >=3.0",
        "dubbo=[<=2.7.7, >2.7.8, >=3.0]",
        'dubbo=["<=2.7.7", ">2.7.8", ">=3.0"]',
        "dubbo=['<=2.7.7', '>2.7.8', '>=3.0']",
    ])
    def test_parse_range_rule_spellings(self, line):
        """Test that bracket and quote wrapping yield the same range rules."""
        rules = parse_rules(line)

        assert rules["dubbo"] == [
            RangeRule(LE, "2.7.7"),
            RangeRule(GT, "2.7.8"),
            RangeRule(GE, "3.0"),
        ]

    def test_two_bounds_in_one_pattern_form_interval(self):
        """Test that two bounds inside one pattern become a combined rule."""
        rules = parse_rules("dubbo=>2.7.8 <3.0, >=3.1")["dubbo"]

        assert rules == [
            CombinedRangeRule((RangeRule(GT, "2.7.8"), RangeRule(LT, "3.0"))),
            RangeRule(GE, "3.1"),
        ]

    def test_comments_blank_lines_and_order(self, temp_rules_file):
        """Test that comments are skipped and file order is kept."""
        rules = RuleFileParser().parse(temp_rules_file)

        assert list(rules) == ["dubbo.version", "spring.version"]
        assert len(rules["dubbo.version"]) == 4
        assert rules["spring.version"] == [RangeRule(LE, "4.3.30"), RangeRule(GE, "5.1")]

    def test_exclusion_with_space_and_quotes(self):
        """Test excluded patterns inside quotes and with inner spaces."""
        rules = parse_rules("dubbo=\"!2.7.8\", ! 2.7.9")["dubbo"]

        assert rules == [PlainRule("2.7.8", excluded=True), PlainRule("2.7.9", excluded=True)]

    def test_blank_patterns_are_skipped(self):
        """Test that a trailing comma does not create an empty rule."""
        assert parse_rules("dubbo=2.7.7,")["dubbo"] == [PlainRule("2.7.7")]

    def test_component_split_at_first_equals(self):
        """Test that the component ends at the first '='."""
        rules = parse_rules("dubbo=>=3.0")

        assert rules == {"dubbo": [RangeRule(GE, "3.0")]}

    @pytest.mark.parametrize("line", [
        "dubbo=[2.7*",
        'dubbo="2.7.7',
        "dubbo='2.7.7",
        "dubbo=>=",
        "dubbo=>2.7 3.0",
        "dubbo=>2.7 <3.0 >=4.0",
        "dubbo=> >=",
        "dubbo 2.7.7",
        "=2.7.7",
    ])
    def test_malformed_lines(self, line):
        """Test that malformed rule lines raise RuleSyntaxError."""
        with pytest.raises(RuleSyntaxError):
            parse_rules(line)

    def test_error_carries_line_number(self):
        """Test that the failing line number is reported."""
        with pytest.raises(RuleSyntaxError) as exc_info:
            parse_rules("# header\n\ndubbo=2.7*\nspring=[5.1\n")

        assert exc_info.value.line_number == 4
        assert "line 4" in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        """Test that a missing rule file raises InputError."""
        with pytest.raises(InputError, match="File not exists"):
            RuleFileParser().parse(tmp_path / "missing.conf")

    def test_directory_is_not_a_rule_file(self, tmp_path):
        """Test that a directory is rejected as a rule file."""
        with pytest.raises(InputError):
            RuleFileParser().parse(tmp_path)


class TestPatternParsing:
    """Test single pattern and range expression parsing."""

    def test_plain_pattern(self):
        """Test plain literal patterns."""
        assert parse_pattern(" 2.7.7 ") == PlainRule("2.7.7")

    def test_wildcard_pattern(self):
        """Test wildcard patterns."""
        rule = parse_pattern("'2.7.*'")
        assert isinstance(rule, WildcardRule)
        assert rule.wildcard == "2.7.*"

    def test_single_range(self):
        """Test a single bound."""
        assert parse_range_rule(">=2.7.0") == RangeRule(GE, "2.7.0")

    def test_combined_range(self):
        """Test two bounds without separating whitespace."""
        rule = parse_range_rule(">=2.7<3.0")
        assert isinstance(rule, CombinedRangeRule)
        assert [str(bound) for bound in rule.bounds] == [">=2.7", "<3.0"]

    def test_rule_string_forms(self):
        """Test the textual forms used in diagnostics."""
        assert str(PlainRule("2.7.8", excluded=True)) == "!2.7.8"
        assert str(WildcardRule("2.7*")) == "2.7*"
        assert str(parse_range_rule(">2.7.8 <3.0")) == ">2.7.8 <3.0"


class TestCandidateVersionParser:
    """Test the candidate version specification parser."""

    def test_parse_multiple_components(self):
        """Test parsing several components."""
        versions = parse_candidate_versions("dubbo:2.7.7,2.7.8;spring:5.1.0")

        assert versions == {"dubbo": ["2.7.7", "2.7.8"], "spring": ["5.1.0"]}
        assert list(versions) == ["dubbo", "spring"]

    def test_repeated_component_appends(self):
        """Test that repeated entries append to the same component."""
        versions = parse_candidate_versions("dubbo:2.7.7;\ndubbo: 2.7.8 ;spring:5.1.0;")

        assert versions == {"dubbo": ["2.7.7", "2.7.8"], "spring": ["5.1.0"]}

    def test_whitespace_is_trimmed(self):
        """Test trimming around components and versions."""
        versions = parse_candidate_versions("  dubbo : 2.7.7 , 3.0.0 ")

        assert versions == {"dubbo": ["2.7.7", "3.0.0"]}

    @pytest.mark.parametrize("spec", ["dubbo", ":2.7.7", "dubbo:2.7.7;spring"])
    def test_invalid_entries(self, spec):
        """Test that entries without a component raise InputError."""
        with pytest.raises(InputError):
            parse_candidate_versions(spec)

    def test_parse_file(self, tmp_path):
        """Test reading a candidate specification from a file."""
        spec_file = tmp_path / "candidates.txt"
        spec_file.write_text("dubbo:2.7.7\nspring:5.1.0\n")

        versions = CandidateVersionParser().parse(spec_file)

        assert versions == {"dubbo": ["2.7.7"], "spring": ["5.1.0"]}
