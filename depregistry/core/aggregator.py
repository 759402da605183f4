"""Compatibility aggregation for pruned packages.

For each package the aggregator compresses every version's constraints
into prefix ranges, then groups versions that share the same ranges:

- **Interpreter**: one row per group of package versions with identical
  interpreter ranges. A single row means the package can state its
  interpreter range once.
- **Dependencies**: per dependency name, either one *uniform* range set
  shared by every version of the package, or a *non-uniform* table keyed by
  compressed package-version ranges.

Dependency names are always looked up in the given registry. If a name
referred to different packages in different versions of a package, this
module would not notice; the registry binding is assumed to be stable.

Typical usage::

    compats = aggregate_registry(registry, config.interpreter_universe())
    for compat in compats:
        print(compat.name, compat.uniform_interpreter)
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from depregistry.utils.logger import get_logger
from depregistry.exceptions import ContractViolationError
from depregistry.core.grouping import flatten_keys, invert_grouped, invert_map
from depregistry.core.compressor import compress_interval, compress_versions
from depregistry.models import (
    Package,
    PackageCompat,
    RangeTable,
    Registry,
    VersionNumber,
    VersionRanges,
    sort_names,
)

logger = get_logger("aggregator")


def compat_interpreter(
    package: Package,
    interpreter_versions: Sequence[VersionNumber],
) -> RangeTable:
    """Interpreter ranges per compressed package-version range.

    Returns:
        Rows ordered by the package-version range's lower bound.
    """
    forward: Dict[VersionNumber, VersionRanges] = {
        number: compress_interval(version.interpreter, interpreter_versions)
        for number, version in package.sorted_versions()
    }
    return _group_by_ranges(forward, list(forward))


def compat_versions(
    package: Package,
    registry: Registry,
) -> Tuple[Dict[str, VersionRanges], Dict[str, RangeTable]]:
    """Dependency ranges of ``package``, split by uniformity.

    A dependency is uniform when every version of the package requires it
    with the same compressed ranges.

    Returns:
        ``(uniform, nonuniform)`` mappings keyed by dependency name, both
        ordered case-insensitively.

    Raises:
        ContractViolationError: A dependency is missing from ``registry``,
            which cannot happen once the registry has been pruned.
    """
    forward: Dict[str, Dict[VersionNumber, VersionRanges]] = {}
    for number, version in package.sorted_versions():
        for name, require in version.requires.items():
            dependency = registry.get(name)
            if dependency is None:
                raise ContractViolationError(
                    f"Dependency {name!r} is not in the registry; prune it first",
                    operation="compat_versions",
                )
            forward.setdefault(name, {})[number] = compress_interval(
                require.versions, dependency.versions
            )

    versions = sorted(package.versions)
    uniform: Dict[str, VersionRanges] = {}
    nonuniform: Dict[str, RangeTable] = {}

    for name in sort_names(forward):
        by_version = forward[name]
        groups = invert_map(by_version)
        if len(groups) == 1 and len(by_version) == len(versions):
            uniform[name] = next(iter(groups))
        else:
            nonuniform[name] = _group_by_ranges(by_version, versions)

    return uniform, nonuniform


def aggregate_package(
    name: str,
    package: Package,
    registry: Registry,
    interpreter_versions: Sequence[VersionNumber],
) -> PackageCompat:
    """Collect every compatibility fact the emitter needs for ``package``."""
    uniform, nonuniform = compat_versions(package, registry)
    compat = PackageCompat(
        name=name,
        uuid=package.uuid,
        repo=package.url,
        sha1=[(number, version.sha1) for number, version in package.sorted_versions()],
        interpreter=compat_interpreter(package, interpreter_versions),
        uniform=uniform,
        nonuniform=nonuniform,
        dependency_uuids={
            dep: registry[dep].uuid for dep in sort_names(package.dependency_names())
        },
    )
    logger.debug(
        "%s: %d interpreter row(s), %d uniform / %d non-uniform dependencies",
        name,
        len(compat.interpreter),
        len(uniform),
        len(nonuniform),
    )
    return compat


def aggregate_registry(
    registry: Registry,
    interpreter_versions: Sequence[VersionNumber],
) -> List[PackageCompat]:
    """Aggregate every package, ordered by case-insensitive name."""
    interpreter_versions = sorted(interpreter_versions)
    return [
        aggregate_package(name, registry[name], registry, interpreter_versions)
        for name in sort_names(registry)
    ]


def _group_by_ranges(
    forward: Dict[VersionNumber, VersionRanges],
    versions: Sequence[VersionNumber],
) -> RangeTable:
    """Turn ``version -> ranges`` into rows of ``(version range, ranges)``.

    Versions sharing the same ranges are compressed together against all
    of ``versions``, then each resulting range becomes its own row.
    """
    by_ranges = {
        ranges: compress_versions(numbers, versions)
        for ranges, numbers in invert_map(forward).items()
    }
    rows = {
        version_range: tuple(ranges)
        for version_range, ranges in flatten_keys(invert_grouped(by_ranges)).items()
    }
    return sorted(rows.items(), key=lambda row: row[0].low)
