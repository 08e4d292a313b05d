"""Parser for case version rule files.

Accepted line formats::

    dubbo.version=2.7*, 3.*, !2.7.8*, !2.7.8.1
    dubbo.version=<=2.7.7, >2.7.8, >=3.0
    dubbo.version=[<=2.7.7, >2.7.8, >=3.0]
    dubbo.version=["<=2.7.7", ">2.7.8", ">=3.0"]
    dubbo.version=['<=2.7.7', '>2.7.8', '>=3.0']
    dubbo.version=>2.7.8 <3.0

Comma separated patterns are alternatives; two bounds inside one pattern form
an interval.
"""

import re
from typing import Dict, List, Tuple

from ..comparator import ComparisonOperator
from ..exceptions import RuleSyntaxError, VersionParseError
from ..rules import CombinedRangeRule, MatchRule, PlainRule, RangeRule, WildcardRule
from .base import BaseParser
from ...utils.logging import get_logger

RuleMap = Dict[str, List[MatchRule]]

_RANGE_TOKEN = re.compile(r'<=|>=|<|>|[0-9.]+')
_OPERATOR_SYMBOLS = {"<=", ">=", "<", ">"}


def trim_wrapping(text: str, begin: str, end: str = "") -> str:
    """Remove one pair of wrapping characters.

    Args:
        text: Text to unwrap
        begin: Opening character
        end: Closing character, defaults to ``begin``

    Returns:
        Trimmed text without the wrapping pair, or the trimmed text unchanged

    Raises:
        RuleSyntaxError: If the text opens the pair without closing it
    """
    end = end or begin
    text = text.strip()
    if text.startswith(begin):
        if len(text) > 1 and text.endswith(end):
            return text[1:-1]
        raise RuleSyntaxError(f"Version match rule is invalid: {text}")
    return text


def parse_range_rule(pattern: str) -> MatchRule:
    """Parse a range expression into a range or combined range rule.

    Args:
        pattern: Expression such as ``>=2.7`` or ``>2.7.8 <3.0``

    Returns:
        RangeRule for one bound, CombinedRangeRule for two

    Raises:
        RuleSyntaxError: If the expression is not one or two operator/version pairs
    """
    tokens = _RANGE_TOKEN.findall(pattern)
    bounds: List[RangeRule] = []
    for i in range(0, len(tokens), 2):
        if len(bounds) == 2:
            raise RuleSyntaxError(f"Invalid range match rule: {pattern}")
        operator = tokens[i]
        if i + 1 >= len(tokens):
            raise RuleSyntaxError(f"Parse range match rule failed, unexpected EOF: {pattern}")
        version = tokens[i + 1]
        if operator not in _OPERATOR_SYMBOLS:
            raise RuleSyntaxError(f"Comparison operator is invalid: {operator} in {pattern}")
        if version in _OPERATOR_SYMBOLS:
            raise RuleSyntaxError(f"Expected a version after '{operator}' in {pattern}")
        try:
            bounds.append(RangeRule(ComparisonOperator.from_symbol(operator), version))
        except VersionParseError as e:
            raise RuleSyntaxError(f"Invalid version in range match rule {pattern}: {e}") from e

    if len(bounds) == 1:
        return bounds[0]
    if len(bounds) == 2:
        return CombinedRangeRule((bounds[0], bounds[1]))
    raise RuleSyntaxError(f"Parse range match rule failed: {pattern}")


def parse_pattern(pattern: str) -> MatchRule:
    """Parse one pattern token of a rule line.

    Args:
        pattern: Token such as ``2.7*``, ``'!2.7.8'`` or ``>=3.0``

    Returns:
        The match rule the token describes
    """
    pattern = trim_wrapping(pattern, '"')
    pattern = trim_wrapping(pattern, "'").strip()
    if pattern.startswith(('>', '<')):
        return parse_range_rule(pattern)

    excluded = False
    if pattern.startswith('!'):
        excluded = True
        pattern = pattern[1:].strip()

    if '*' in pattern:
        return WildcardRule(pattern, excluded=excluded)
    return PlainRule(pattern, excluded=excluded)


class RuleFileParser(BaseParser):
    """Parser for ``component=pattern[,pattern...]`` rule files."""

    def __init__(self) -> None:
        """Initialize the rule file parser."""
        super().__init__()
        self.input_type = "case versions"
        self.logger = get_logger("RuleFileParser")

    def parse_text(self, text: str) -> RuleMap:
        """Parse rule file contents.

        Args:
            text: Rule file contents

        Returns:
            Mapping of component to its ordered rules, in file order

        Raises:
            RuleSyntaxError: On the first malformed line; no partial result is returned
        """
        rule_map: RuleMap = {}
        for line_num, line in enumerate(text.splitlines(), 1):
            line = line.strip()

            # Skip comments and empty lines
            if not line or line.startswith('#'):
                continue

            try:
                component, rules = self._parse_rule_line(line)
            except RuleSyntaxError as e:
                self.logger.error(f"Parse case versions rules failed: {e}")
                raise RuleSyntaxError(str(e), line_num) from e
            rule_map[component] = rules
            self.logger.debug(f"Rules for {component}: {[str(rule) for rule in rules]}")

        return rule_map

    def _parse_rule_line(self, line: str) -> Tuple[str, List[MatchRule]]:
        """Parse a single ``component=patterns`` line.

        Args:
            line: Stripped, non-comment line

        Returns:
            Component name and its rules
        """
        component, sep, pattern_list = line.partition('=')
        component = component.strip()
        if not sep:
            raise RuleSyntaxError(f"Missing '=' in rule line: {line}")
        if not component:
            raise RuleSyntaxError(f"Missing component name in rule line: {line}")

        pattern_list = trim_wrapping(pattern_list, '[', ']')
        rules = []
        for pattern in pattern_list.split(','):
            if not pattern.strip():
                continue
            rules.append(parse_pattern(pattern))
        return component, rules


def parse_rules(text: str) -> RuleMap:
    """Parse rule file contents with a fresh :class:`RuleFileParser`."""
    return RuleFileParser().parse_text(text)
