"""
Compatibility facts derived for one package.

:class:`PackageCompat` is what the aggregator hands to the emitter. Every
collection in it is already ordered the way it must be written out, so the
emitter never re-sorts.
"""

from __future__ import annotations

from uuid import UUID
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from depregistry.models.version import VersionNumber, VersionRange, VersionRanges

#: Rows of ``(package-version range, constraint ranges)``, ordered by range.
RangeTable = List[Tuple[VersionRange, VersionRanges]]


@dataclass
class PackageCompat:
    """Compatibility facts for a single surviving package.

    Attributes:
        name: Package name.
        uuid: Derived package identifier.
        repo: Source location.
        sha1: ``(version, content hash)`` pairs in ascending version order.
        interpreter: Interpreter ranges per package-version range. A single
            row means every version shares the same interpreter ranges.
        uniform: Dependencies whose constraint is identical across all
            versions, ordered by case-insensitive name.
        nonuniform: Per-version-range constraint tables for the remaining
            dependencies, ordered by case-insensitive name.
        dependency_uuids: Identifier of every dependency, ordered by
            case-insensitive name.
    """

    name: str
    uuid: UUID
    repo: str
    sha1: List[Tuple[VersionNumber, str]] = field(default_factory=list)
    interpreter: RangeTable = field(default_factory=list)
    uniform: Dict[str, VersionRanges] = field(default_factory=dict)
    nonuniform: Dict[str, RangeTable] = field(default_factory=dict)
    dependency_uuids: Dict[str, UUID] = field(default_factory=dict)

    @property
    def uniform_interpreter(self) -> Optional[VersionRanges]:
        """Interpreter ranges shared by every version, if there is one set."""
        if len(self.interpreter) == 1:
            return self.interpreter[0][1]
        return None

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""

        def ranges(values: VersionRanges) -> List[str]:
            return [str(value) for value in values]

        def table(rows: RangeTable) -> List[Dict[str, Any]]:
            return [{"versions": str(key), "ranges": ranges(value)} for key, value in rows]

        return {
            "name": self.name,
            "uuid": str(self.uuid),
            "repo": self.repo,
            "sha1": {str(number): digest for number, digest in self.sha1},
            "interpreter": table(self.interpreter),
            "uniform": {name: ranges(value) for name, value in self.uniform.items()},
            "nonuniform": {name: table(rows) for name, rows in self.nonuniform.items()},
            "uuids": {name: str(value) for name, value in self.dependency_uuids.items()},
        }
