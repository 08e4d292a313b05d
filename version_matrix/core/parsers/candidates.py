"""Parser for candidate version specifications."""

import re
from typing import Dict, List

from ..exceptions import InputError
from .base import BaseParser

CandidateMap = Dict[str, List[str]]

_ENTRY_SEPARATOR = re.compile(r'[;\n]')


class CandidateVersionParser(BaseParser):
    """Parser for ``component:ver1[,ver2][;component2:ver1]`` strings.

    A component may be listed several times, e.g.
    ``dubbo:2.7.7;dubbo:2.7.8;spring:5.1.0``; its versions are appended in
    the order they appear.
    """

    def __init__(self) -> None:
        """Initialize the candidate version parser."""
        super().__init__()
        self.input_type = "candidate versions"

    def parse_text(self, text: str) -> CandidateMap:
        """Parse a candidate version specification.

        Args:
            text: Specification with entries separated by ``;`` or newlines

        Returns:
            Mapping of component to candidate versions, in first-seen order

        Raises:
            InputError: If an entry has no ``:`` or no component name
        """
        version_map: CandidateMap = {}
        for entry in _ENTRY_SEPARATOR.split(text):
            if not entry.strip():
                continue

            component, sep, versions = entry.partition(':')
            component = component.strip()
            if not sep or not component:
                raise InputError(f"Invalid candidate versions entry: '{entry.strip()}'")

            version_list = version_map.setdefault(component, [])
            for version in versions.split(','):
                version = version.strip()
                if version:
                    version_list.append(version)

        return version_map


def parse_candidate_versions(text: str) -> CandidateMap:
    """Parse a candidate version specification string."""
    return CandidateVersionParser().parse_text(text)
