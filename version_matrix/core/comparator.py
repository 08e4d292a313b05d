"""Numeric version comparison over fixed four-segment vectors."""

import re
from enum import Enum
from typing import Tuple, Union

from .exceptions import VersionParseError

SEGMENT_COUNT = 4

VersionKey = Tuple[int, int, int, int]

_DIGITS = re.compile(r"[0-9]+")


def trim_version(version: str) -> str:
    """Strip a qualifier such as ``-SNAPSHOT`` from a version string.

    The version is cut at the first ``-`` unless it is the leading character.

    Args:
        version: Raw version string

    Returns:
        Version without its qualifier
    """
    p = version.find('-')
    if p > 0:
        return version[:p]
    return version


def to_version_key(version: str) -> VersionKey:
    """Convert a version string into exactly four integer segments.

    Empty segments are skipped, missing segments become 0 and anything past the
    fourth segment is ignored.

    Args:
        version: Qualifier-free version string, e.g. ``2.7.8``

    Returns:
        Four-segment integer tuple

    Raises:
        VersionParseError: If one of the first four segments is not an integer
    """
    segments = [s for s in version.strip().split('.') if s]
    key = [0] * SEGMENT_COUNT
    for i, segment in enumerate(segments[:SEGMENT_COUNT]):
        if not _DIGITS.fullmatch(segment):
            raise VersionParseError(f"Invalid version segment '{segment}' in version: {version}")
        key[i] = int(segment)
    return tuple(key)  # type: ignore[return-value]


def _order(candidate: VersionKey, bound: VersionKey) -> int:
    # first differing segment decides
    for left, right in zip(candidate, bound):
        if left > right:
            return 1
        if left < right:
            return -1
    return 0


class ComparisonOperator(Enum):
    """Ordering relations usable in range rules."""

    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    EQUAL = "=="

    @classmethod
    def from_symbol(cls, symbol: str) -> "ComparisonOperator":
        """Look up an operator by its symbol.

        Raises:
            ValueError: If the symbol is not a known operator
        """
        try:
            return cls(symbol.strip())
        except ValueError:
            raise ValueError(f"Comparison operator is invalid: {symbol}") from None

    @property
    def symbol(self) -> str:
        return self.value

    def matches(self, candidate: VersionKey, bound: VersionKey) -> bool:
        """Apply the relation to two normalized version keys."""
        order = _order(candidate, bound)
        if self is ComparisonOperator.GREATER_THAN:
            return order > 0
        if self is ComparisonOperator.GREATER_THAN_OR_EQUAL:
            return order > 0 or candidate == bound
        if self is ComparisonOperator.LESS_THAN:
            return order < 0
        if self is ComparisonOperator.LESS_THAN_OR_EQUAL:
            return order < 0 or candidate == bound
        return candidate == bound


def compare(
    op: Union[str, ComparisonOperator],
    candidate: Union[str, VersionKey],
    bound: Union[str, VersionKey],
) -> bool:
    """Compare two versions under an ordering relation.

    Args:
        op: Operator symbol (``>``, ``>=``, ``<``, ``<=``, ``==``) or enum member
        candidate: Version being tested, as a string or a version key
        bound: Version it is compared against, as a string or a version key

    Returns:
        True if ``candidate op bound`` holds
    """
    operator = op if isinstance(op, ComparisonOperator) else ComparisonOperator.from_symbol(op)
    if isinstance(candidate, str):
        candidate = to_version_key(trim_version(candidate))
    if isinstance(bound, str):
        bound = to_version_key(trim_version(bound))
    return operator.matches(candidate, bound)
