"""
Package metadata model for depregistry.

A :data:`Registry` maps package names to :class:`Package` objects, each of
which owns its released :class:`Version` records keyed by
:class:`~depregistry.models.version.VersionNumber`. Values are built once by
the loader; the pruner only ever deletes entries, it never edits fields.
"""

from __future__ import annotations

from uuid import UUID
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Set, Tuple

from depregistry.models.version import VersionInterval, VersionNumber


@dataclass(frozen=True)
class Require:
    """A dependency constraint on another package.

    Attributes:
        versions: Versions of the dependency that satisfy the constraint.
        systems: Platform tags the dependency is restricted to (opaque).
    """

    versions: VersionInterval = field(default_factory=VersionInterval)
    systems: FrozenSet[str] = frozenset()

    def combine(self, other: Require) -> Require:
        """Merge two constraints on the same dependency.

        The version intervals are intersected and the platform tags are
        unioned.
        """
        return Require(
            versions=self.versions.intersect(other.versions),
            systems=self.systems | other.systems,
        )

    def is_satisfied_by(self, version: VersionNumber) -> bool:
        return version in self.versions


@dataclass
class Version:
    """A released version of a package.

    Attributes:
        sha1: Content hash recorded for the release.
        interpreter: Interpreter versions the release supports.
        requires: Dependency constraints keyed by dependency name.
    """

    sha1: str
    interpreter: VersionInterval
    requires: Dict[str, Require] = field(default_factory=dict)


@dataclass
class Package:
    """A package and all of its released versions.

    Attributes:
        uuid: Namespace-scoped identifier derived from the package name.
        url: Repository location of the package sources.
        versions: Released versions keyed by version number.
    """

    uuid: UUID
    url: str
    versions: Dict[VersionNumber, Version] = field(default_factory=dict)

    def sorted_versions(self) -> Iterator[Tuple[VersionNumber, Version]]:
        """Iterate ``(number, version)`` pairs in ascending version order."""
        for number in sorted(self.versions):
            yield number, self.versions[number]

    def dependency_names(self) -> Set[str]:
        """Names of every package required by any version."""
        names: Set[str] = set()
        for version in self.versions.values():
            names.update(version.requires)
        return names


#: Packages keyed by case-sensitive name.
Registry = Dict[str, Package]


def sort_names(names: Iterable[str]) -> List[str]:
    """Order names case-insensitively, breaking ties by exact name."""
    return sorted(names, key=lambda name: (name.lower(), name))
