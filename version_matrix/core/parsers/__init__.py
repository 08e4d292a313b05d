"""Input parsers for candidate versions and case version rules."""

from .base import BaseParser
from .candidates import CandidateMap, CandidateVersionParser, parse_candidate_versions
from .rules import RuleFileParser, RuleMap, parse_pattern, parse_range_rule, parse_rules

__all__ = [
    "BaseParser",
    "CandidateMap",
    "CandidateVersionParser",
    "RuleFileParser",
    "RuleMap",
    "parse_candidate_versions",
    "parse_pattern",
    "parse_range_rule",
    "parse_rules",
]
