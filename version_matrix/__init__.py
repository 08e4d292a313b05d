"""VersionMatrix - expands per-component version match rules into a test version matrix."""

__version__ = "0.1.0"

from .core.matcher import VersionMatcher
from .core.parsers import RuleFileParser, CandidateVersionParser
from .core.expander import VersionProfile, expand
from .core.pipeline import MatrixResult, build_matrix
from .output.formatters import ConsoleFormatter, MatrixFormatter

__all__ = [
    "VersionMatcher",
    "RuleFileParser",
    "CandidateVersionParser",
    "VersionProfile",
    "expand",
    "MatrixResult",
    "build_matrix",
    "ConsoleFormatter",
    "MatrixFormatter",
]
