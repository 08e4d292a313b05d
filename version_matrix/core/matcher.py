"""Core version matching logic for VersionMatrix."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..utils.logging import get_logger
from .comparator import trim_version
from .exceptions import UnmatchedError
from .rules import CombinedRangeRule, MatchRule, PlainRule, RangeRule, WildcardRule

MatchedVersionMap = Dict[str, List[str]]


def rule_matches(rule: MatchRule, version: str) -> bool:
    """Check whether a single rule matches a candidate version.

    Plain and wildcard rules see the raw candidate; range rules see it with its
    qualifier stripped.

    Args:
        rule: Rule to apply
        version: Raw candidate version as listed

    Returns:
        True if the rule matches, regardless of the rule's polarity
    """
    if isinstance(rule, (PlainRule, WildcardRule)):
        return rule.matches(version)
    if isinstance(rule, (RangeRule, CombinedRangeRule)):
        return rule.matches(trim_version(version))
    raise TypeError(f"Unsupported match rule: {rule!r}")


def has_include_version(rules: Sequence[MatchRule], version: str) -> bool:
    """Decide whether a candidate is included by a component's rules.

    Args:
        rules: Component rules in file order
        version: Raw candidate version

    Returns:
        True if some non-excluded rule matches and no excluded rule does
    """
    included = False
    for rule in rules:
        if rule_matches(rule, version):
            # excluded rules win over included ones
            if rule.excluded:
                return False
            included = True
    return included


def case_specific_versions(rules: Sequence[MatchRule]) -> List[str]:
    """Literal versions of the non-excluded plain rules, in rule order."""
    return [rule.version for rule in rules if isinstance(rule, PlainRule) and not rule.excluded]


@dataclass
class RuleEvaluation:
    """Outcome of one rule against one candidate."""

    rule: MatchRule
    matched: bool

    @property
    def verdict(self) -> str:
        if not self.matched:
            return "no match"
        return "excluded" if self.rule.excluded else "match"


@dataclass
class CandidateDecision:
    """Per-rule breakdown of why a candidate was kept or dropped."""

    version: str
    evaluations: List[RuleEvaluation] = field(default_factory=list)

    @property
    def included(self) -> bool:
        matched = [e for e in self.evaluations if e.matched]
        return bool(matched) and not any(e.rule.excluded for e in matched)


class VersionMatcher:
    """Intersects candidate versions with component match rules."""

    def __init__(self, include_case_specific_version: bool = True) -> None:
        """Initialize the version matcher.

        Args:
            include_case_specific_version: Fall back to the rules' literal
                versions when no candidate matches
        """
        self.include_case_specific_version = include_case_specific_version
        self.logger = get_logger("VersionMatcher")

    def match_component(self, rules: Sequence[MatchRule], candidates: Sequence[str]) -> List[str]:
        """Match a component's candidate versions against its rules.

        Args:
            rules: Component rules in file order
            candidates: Candidate versions in listed order

        Returns:
            Matched versions, possibly the case-specific fallback, possibly empty
        """
        matched = [version for version in candidates if has_include_version(rules, version)]

        if not matched and self.include_case_specific_version:
            matched = case_specific_versions(rules)
            if matched:
                self.logger.debug(f"No candidate matched, using case specific versions: {matched}")

        return matched

    def match_all(
        self,
        candidate_versions: Dict[str, List[str]],
        rule_map: Dict[str, List[MatchRule]]
    ) -> MatchedVersionMap:
        """Match every ruled component and require each to match something.

        Components without rules are skipped. The result follows the order of
        the candidate map.

        Args:
            candidate_versions: Component to candidate versions
            rule_map: Component to rules

        Returns:
            Component to matched versions

        Raises:
            UnmatchedError: Listing every ruled component left without versions
        """
        matched_map: MatchedVersionMap = {}

        for component, candidates in candidate_versions.items():
            rules = rule_map.get(component)
            if not rules:
                self.logger.debug(f"Skipping {component}: no match rules")
                continue

            matched = self.match_component(rules, candidates)
            self.logger.debug(f"{component}: {len(matched)} of {len(candidates)} candidates matched {matched}")
            if matched:
                matched_map[component] = matched

        unmatched: List[Tuple[str, List[MatchRule]]] = [
            (component, rules) for component, rules in rule_map.items()
            if component not in matched_map
        ]
        if unmatched:
            raise UnmatchedError(unmatched)

        return matched_map

    def explain(self, rules: Sequence[MatchRule], candidates: Sequence[str]) -> List[CandidateDecision]:
        """Evaluate every rule against every candidate for diagnostics.

        Args:
            rules: Component rules
            candidates: Candidate versions

        Returns:
            One decision per candidate, in candidate order
        """
        decisions = []
        for version in candidates:
            decision = CandidateDecision(version=version)
            for rule in rules:
                decision.evaluations.append(RuleEvaluation(rule=rule, matched=rule_matches(rule, version)))
            decisions.append(decision)
        return decisions

    def get_fallback_versions(self, rules: Sequence[MatchRule]) -> Optional[List[str]]:
        """Versions the fallback would inject, or None when it is disabled."""
        if not self.include_case_specific_version:
            return None
        return case_specific_versions(rules)
