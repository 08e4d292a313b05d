"""Core rule parsing, version matching and matrix expansion for VersionMatrix."""

from .comparator import ComparisonOperator, compare, to_version_key, trim_version
from .expander import VersionProfile, expand
from .matcher import VersionMatcher, has_include_version, rule_matches
from .parsers import parse_candidate_versions, parse_rules
from .rules import CombinedRangeRule, MatchRule, PlainRule, RangeRule, WildcardRule

__all__ = [
    "CombinedRangeRule",
    "ComparisonOperator",
    "MatchRule",
    "PlainRule",
    "RangeRule",
    "VersionMatcher",
    "VersionProfile",
    "WildcardRule",
    "compare",
    "expand",
    "has_include_version",
    "parse_candidate_versions",
    "parse_rules",
    "rule_matches",
    "to_version_key",
    "trim_version",
]
