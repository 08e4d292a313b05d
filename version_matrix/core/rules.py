"""Version match rule model.

A component's rules form an ordered list drawn from a closed set of variants:

* ``PlainRule`` - exact version text, e.g. ``2.7.7`` or ``!2.7.8``
* ``WildcardRule`` - ``*`` glob, e.g. ``2.7*`` or ``!2.7.8*``
* ``RangeRule`` - a single bound, e.g. ``>=3.0``
* ``CombinedRangeRule`` - two bounds that must both hold, e.g. ``>2.7.8 <3.0``

Plain and wildcard rules test the raw candidate string; range rules test the
qualifier-stripped numeric form.
"""

import re
from dataclasses import dataclass, field
from typing import Tuple, Union

from .comparator import ComparisonOperator, VersionKey, to_version_key

RANGE_OPERATORS = (
    ComparisonOperator.GREATER_THAN,
    ComparisonOperator.GREATER_THAN_OR_EQUAL,
    ComparisonOperator.LESS_THAN,
    ComparisonOperator.LESS_THAN_OR_EQUAL,
)


def wildcard_to_regex(wildcard: str) -> re.Pattern[str]:
    """Compile a ``*`` wildcard into a non-greedy regex, other characters literal.

    The pattern is meant for ``fullmatch`` so the whole version must match.
    """
    regex = ".*?".join(re.escape(part) for part in wildcard.split("*"))
    return re.compile(regex)


@dataclass(frozen=True)
class PlainRule:
    """Exact version literal."""

    version: str
    excluded: bool = False

    def matches(self, version: str) -> bool:
        return self.version == version

    def __str__(self) -> str:
        return ("!" if self.excluded else "") + self.version


@dataclass(frozen=True)
class WildcardRule:
    """Version glob where ``*`` matches any run of characters."""

    wildcard: str
    excluded: bool = False
    pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", wildcard_to_regex(self.wildcard))

    def matches(self, version: str) -> bool:
        return self.pattern.fullmatch(version) is not None

    def __str__(self) -> str:
        return ("!" if self.excluded else "") + self.wildcard


@dataclass(frozen=True)
class RangeRule:
    """Single numeric bound such as ``>=2.7.0``."""

    operator: ComparisonOperator
    version: str
    bound: VersionKey = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.operator not in RANGE_OPERATORS:
            raise ValueError(f"Comparison operator is invalid for a range: {self.operator.symbol}")
        object.__setattr__(self, "bound", to_version_key(self.version))

    @property
    def excluded(self) -> bool:
        return False

    def matches(self, version: str) -> bool:
        """Test a qualifier-stripped version against the bound."""
        return self.operator.matches(to_version_key(version), self.bound)

    def __str__(self) -> str:
        return self.operator.symbol + self.version


@dataclass(frozen=True)
class CombinedRangeRule:
    """Interval made of two bounds that must both match."""

    bounds: Tuple[RangeRule, RangeRule]

    @property
    def excluded(self) -> bool:
        return False

    def matches(self, version: str) -> bool:
        return all(rule.matches(version) for rule in self.bounds)

    def __str__(self) -> str:
        return " ".join(str(rule) for rule in self.bounds)


MatchRule = Union[PlainRule, WildcardRule, RangeRule, CombinedRangeRule]

RULE_TYPES = (PlainRule, WildcardRule, RangeRule, CombinedRangeRule)
