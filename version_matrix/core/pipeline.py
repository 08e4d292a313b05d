"""End-to-end version matrix computation, free of file output."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..utils.logging import get_logger
from ..utils.performance import PerformanceMonitor, benchmark
from .expander import VersionProfile, expand
from .matcher import MatchedVersionMap, VersionMatcher
from .parsers import CandidateVersionParser, RuleFileParser, RuleMap
from .rules import MatchRule

logger = get_logger("Pipeline")


@dataclass
class MatrixResult:
    """Everything a run computed before the matrix is written."""

    candidate_versions: Dict[str, List[str]]
    rules: Dict[str, List[MatchRule]]
    matched_versions: MatchedVersionMap
    profiles: List[VersionProfile] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.profiles)


@benchmark
def build_matrix(
    candidate_spec: str,
    rules_text: str,
    include_case_specific_version: bool = True,
    performance_monitor: Optional[PerformanceMonitor] = None,
) -> MatrixResult:
    """Parse both inputs, match every component and expand the profiles.

    Args:
        candidate_spec: Candidate version specification string
        rules_text: Case version rule file contents
        include_case_specific_version: Enable the literal-version fallback
        performance_monitor: Monitor receiving the stage timings

    Returns:
        The computed matrix with its intermediate results

    Raises:
        InputError: Malformed candidate specification
        RuleSyntaxError: Malformed rule text
        VersionParseError: A candidate with a non-numeric segment met a range rule
        UnmatchedError: Some ruled component matched nothing
        EmptyMatrixError: No component participated
    """
    monitor = performance_monitor or PerformanceMonitor()

    with monitor.measure("parse_candidates"):
        candidate_versions = CandidateVersionParser().parse_text(candidate_spec)
    with monitor.measure("parse_rules"):
        rules: RuleMap = RuleFileParser().parse_text(rules_text)

    matcher = VersionMatcher(include_case_specific_version=include_case_specific_version)
    with monitor.measure("match"):
        matched_versions = matcher.match_all(candidate_versions, rules)

    with monitor.measure("expand"):
        profiles = expand(matched_versions)

    logger.debug(f"Matched versions: {matched_versions}")
    return MatrixResult(
        candidate_versions=candidate_versions,
        rules=rules,
        matched_versions=matched_versions,
        profiles=profiles,
    )
