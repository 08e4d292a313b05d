"""Version profile expansion: the cartesian product of matched versions."""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple

from .exceptions import EmptyMatrixError

PROFILE_SEPARATOR = ":"


@dataclass(frozen=True)
class VersionProfile:
    """One version per component, in component order."""

    entries: Tuple[Tuple[str, str], ...] = ()

    def extend(self, component: str, version: str) -> "VersionProfile":
        """Return a new profile with ``component:version`` appended."""
        return VersionProfile(self.entries + ((component, version),))

    def as_dict(self) -> Dict[str, str]:
        return dict(self.entries)

    def to_strings(self) -> List[str]:
        """Entries in ``component:version`` form."""
        return [f"{component}{PROFILE_SEPARATOR}{version}" for component, version in self.entries]

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return " ".join(self.to_strings())


def append_component(
    profiles: Sequence[VersionProfile],
    component: str,
    versions: Sequence[str]
) -> List[VersionProfile]:
    """Extend every partial profile with every version of one component.

    Args:
        profiles: Partial profiles built so far
        component: Component being added
        versions: Its matched versions

    Returns:
        ``len(profiles) * len(versions)`` new profiles, grouped by version
    """
    return [profile.extend(component, version) for version in versions for profile in profiles]


def expand(matched_versions: Dict[str, List[str]]) -> List[VersionProfile]:
    """Expand per-component matched versions into all version profiles.

    Args:
        matched_versions: Component to matched versions, in component order

    Returns:
        Every combination of one version per component

    Raises:
        EmptyMatrixError: If there are no participating components
    """
    if not matched_versions:
        raise EmptyMatrixError()

    profiles: List[VersionProfile] = [VersionProfile()]
    for component, versions in matched_versions.items():
        profiles = append_component(profiles, component, versions)

    if not profiles:
        raise EmptyMatrixError()
    return profiles
