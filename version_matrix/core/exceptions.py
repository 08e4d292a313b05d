"""Error taxonomy for VersionMatrix.

Every failure carries the process exit status the CLI reports for it, so the
core can raise freely and leave the exit decision to the caller.
"""

from typing import List, Sequence, Tuple

EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_UNMATCHED = 2


class VersionMatrixError(Exception):
    """Base class for all VersionMatrix errors."""

    exit_code: int = EXIT_FAILED


class InputError(VersionMatrixError):
    """Missing or invalid configuration, or an unreadable input file."""


class RuleSyntaxError(InputError):
    """Malformed version match rule."""

    def __init__(self, message: str, line_number: int = 0) -> None:
        """Initialize the error.

        Args:
            message: Description of the problem
            line_number: 1-based line in the rules text, 0 when unknown
        """
        self.line_number = line_number
        if line_number:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class VersionParseError(VersionMatrixError):
    """A version string has a segment that is not an integer."""


class MatrixWriteError(VersionMatrixError):
    """Writing the version matrix file failed."""


class MatchError(VersionMatrixError):
    """Nothing usable matched; distinct from structural failures."""

    exit_code = EXIT_UNMATCHED


class UnmatchedError(MatchError):
    """One or more components ended up without any matched version."""

    def __init__(self, unmatched: Sequence[Tuple[str, Sequence[object]]]) -> None:
        """Initialize the error.

        Args:
            unmatched: (component, rules) pairs for every unmatched component
        """
        self.unmatched: List[Tuple[str, List[object]]] = [
            (component, list(rules)) for component, rules in unmatched
        ]
        details = "; ".join(
            f"{component}, rules: [{', '.join(str(rule) for rule in rules)}]"
            for component, rules in self.unmatched
        )
        super().__init__(f"Component not match: {details}")

    @property
    def components(self) -> List[str]:
        """Names of the unmatched components, in rule order."""
        return [component for component, _ in self.unmatched]


class EmptyMatrixError(MatchError):
    """The expanded version matrix has no profiles."""

    def __init__(self, message: str = "Version matrix is empty") -> None:
        super().__init__(message)
