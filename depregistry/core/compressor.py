"""
Version-range compression.

Given a set of versions to *include* and the *universe* of known versions
it was drawn from, :func:`compress_versions` returns the shortest greedy
list of inclusive prefix ranges that admits every included version and no
excluded one.

The algorithm, in ascending version order:

1. If nothing is excluded, emit one ``major.minor`` range from the first
   to the last included version.
2. Otherwise try the coarse ``(major, minor)`` prefix for each included
   version, falling back to the exact ``(major, minor, patch)`` prefix
   when the coarse one would admit an excluded version.
3. Extend the currently open range up to that prefix unless the extended
   range would admit an excluded version, in which case start a new one.

Every result is re-expanded against the universe before it is returned;
a mismatch raises :class:`~depregistry.exceptions.ContractViolationError`.

Typical usage::

    universe = [VersionNumber(0, m) for m in range(1, 6)]
    compress_interval(VersionInterval(VersionNumber(0, 2), VersionNumber(0, 5)), universe)
    # (VersionRange(low=VersionPrefix(parts=(0, 2)), high=VersionPrefix(parts=(0, 4))),)
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Set

from depregistry.exceptions import ContractViolationError
from depregistry.core.comparator import in_range, range_contains
from depregistry.models.version import (
    VersionInterval,
    VersionNumber,
    VersionPrefix,
    VersionRange,
    VersionRanges,
)


def compress_versions(
    include: Iterable[VersionNumber],
    universe: Iterable[VersionNumber],
) -> VersionRanges:
    """Compress ``include`` into prefix ranges relative to ``universe``.

    Args:
        include: Versions that must be admitted. Must be a subset of
            ``universe``.
        universe: Every known version; those not in ``include`` must be
            rejected by the result.

    Returns:
        Ranges in ascending order. Empty when ``include`` is empty.

    Raises:
        ContractViolationError: ``include`` is not a subset of ``universe``.
    """
    known = sorted(set(universe))
    included = sorted(set(include))
    included_set: Set[VersionNumber] = set(included)

    stray = included_set.difference(known)
    if stray:
        raise ContractViolationError(
            "Included versions are missing from the universe: "
            + ", ".join(str(v) for v in sorted(stray)),
            operation="compress_versions",
        )

    if not included:
        return ()

    excluded = [v for v in known if v not in included_set]
    ranges: List[VersionRange] = []

    if not excluded:
        first, last = included[0], included[-1]
        ranges.append(
            VersionRange(VersionPrefix.of(first, 2), VersionPrefix.of(last, 2))
        )
    else:
        for version in included:
            prefix = VersionPrefix.of(version, 2)
            if _admits_any(prefix, prefix, excluded):
                prefix = VersionPrefix.of(version, 3)

            if not ranges or _admits_any(ranges[-1].low, prefix, excluded):
                ranges.append(VersionRange.single(prefix))
            else:
                ranges[-1] = VersionRange(ranges[-1].low, prefix)

    result = tuple(ranges)
    _check_round_trip(result, included, excluded)
    return result


def compress_interval(
    interval: VersionInterval,
    universe: Iterable[VersionNumber],
) -> VersionRanges:
    """Compress the members of ``universe`` that lie inside ``interval``."""
    known = list(universe)
    return compress_versions((v for v in known if v in interval), known)


def expand_ranges(
    ranges: Iterable[VersionRange],
    universe: Iterable[VersionNumber],
) -> List[VersionNumber]:
    """Return the versions of ``universe`` admitted by any of ``ranges``, sorted."""
    ranges = list(ranges)
    return sorted(
        v for v in set(universe) if any(range_contains(r, v) for r in ranges)
    )


def _admits_any(
    low: VersionPrefix,
    high: VersionPrefix,
    versions: Sequence[VersionNumber],
) -> bool:
    return any(in_range(v, low, high) for v in versions)


def _check_round_trip(
    ranges: VersionRanges,
    included: Sequence[VersionNumber],
    excluded: Sequence[VersionNumber],
) -> None:
    missed = [v for v in included if not any(range_contains(r, v) for r in ranges)]
    leaked = [v for v in excluded if any(range_contains(r, v) for r in ranges)]
    if missed or leaked:
        raise ContractViolationError(
            f"Compressed ranges do not reproduce the included set "
            f"(missed={[str(v) for v in missed]}, leaked={[str(v) for v in leaked]})",
            operation="compress_versions",
        )
