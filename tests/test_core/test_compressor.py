"""Unit tests for depregistry.core.compressor.

The compressor's central promise is that expanding its output against the
universe gives back exactly the included set. Besides hand-picked cases,
that is checked for every subset of a small mixed universe.

Test Coverage:
- Empty include and full-universe include
- Coarse minor-level ranges and the patch-level fallback
- Merging of consecutive ranges and splitting around excluded versions
- Interval compression against the interpreter universe
- Contract violation when include is not a subset of the universe
"""

from __future__ import annotations

from itertools import combinations
from typing import List

import pytest

from depregistry.core.compressor import (
    compress_interval,
    compress_versions,
    expand_ranges,
)
from depregistry.exceptions import ContractViolationError
from depregistry.models import (
    VersionInterval,
    VersionNumber,
    VersionPrefix,
    VersionRange,
)

V = VersionNumber

MIXED_UNIVERSE = [
    V(0, 1, 0),
    V(0, 1, 1),
    V(0, 2, 0),
    V(1, 0, 0),
    V(1, 0, 1),
    V(1, 1, 0),
    V(2, 0, 0),
]


def _strings(ranges) -> List[str]:
    return [str(r) for r in ranges]


@pytest.mark.unit
class TestCompressVersions:
    """Tests for compress_versions."""

    def test_empty_include_returns_empty(self) -> None:
        """No included versions means no ranges at all."""
        assert compress_versions([], MIXED_UNIVERSE) == ()

    def test_full_universe_is_one_minor_range(self) -> None:
        """With nothing excluded the result is a single first-to-last range."""
        universe = [V(1, 0, 0), V(1, 0, 3), V(1, 2, 5)]

        result = compress_versions(universe, universe)

        assert result == (VersionRange(VersionPrefix((1, 0)), VersionPrefix((1, 2))),)
        assert _strings(result) == ["1.0-1.2"]

    def test_single_version_universe(self) -> None:
        """A one-element universe compresses to that minor release."""
        assert _strings(compress_versions([V(3, 4, 5)], [V(3, 4, 5)])) == ["3.4"]

    def test_consecutive_minors_merge(self) -> None:
        """Adjacent included minors with no excluded version between them merge."""
        universe = [V(0, m) for m in range(1, 6)]
        include = [V(0, 2), V(0, 3), V(0, 4)]

        assert _strings(compress_versions(include, universe)) == ["0.2-0.4"]

    def test_excluded_version_splits_ranges(self) -> None:
        """An excluded version between two included ones forces two ranges."""
        universe = [V(0, m) for m in range(1, 6)]
        include = [V(0, 1), V(0, 3)]

        assert _strings(compress_versions(include, universe)) == ["0.1", "0.3"]

    def test_patch_level_fallback(self) -> None:
        """A minor holding an excluded patch falls back to an exact prefix."""
        universe = [V(1, 0, 0), V(1, 0, 1), V(1, 1, 0)]
        include = [V(1, 0, 0), V(1, 1, 0)]

        result = compress_versions(include, universe)

        assert result == (
            VersionRange.single(VersionPrefix((1, 0, 0))),
            VersionRange.single(VersionPrefix((1, 1))),
        )
        assert _strings(result) == ["1.0.0", "1.1"]

    def test_all_patches_of_a_minor_use_minor_prefix(self) -> None:
        """Including every patch of a minor needs only the minor prefix."""
        universe = [V(1, 0, 0), V(1, 0, 1), V(1, 1, 0)]
        include = [V(1, 0, 0), V(1, 0, 1)]

        assert _strings(compress_versions(include, universe)) == ["1.0"]

    def test_unsorted_input_is_accepted(self) -> None:
        """Order and duplicates in the inputs do not affect the result."""
        universe = [V(0, 3), V(0, 1), V(0, 2), V(0, 1)]
        include = [V(0, 3), V(0, 2), V(0, 3)]

        assert _strings(compress_versions(include, universe)) == ["0.2-0.3"]

    def test_include_outside_universe_raises(self) -> None:
        """Including a version the universe does not know is a caller bug."""
        with pytest.raises(ContractViolationError) as exc_info:
            compress_versions([V(9, 9, 9)], [V(0, 1)])

        assert exc_info.value.operation == "compress_versions"
        assert "9.9.9" in str(exc_info.value)

    def test_every_subset_round_trips(self) -> None:
        """Expanding the ranges yields exactly the included subset, for all subsets."""
        for size in range(len(MIXED_UNIVERSE) + 1):
            for subset in combinations(MIXED_UNIVERSE, size):
                ranges = compress_versions(subset, MIXED_UNIVERSE)
                assert expand_ranges(ranges, MIXED_UNIVERSE) == sorted(subset), subset

    def test_ranges_are_ascending_and_disjoint(self) -> None:
        """Ranges come out in ascending order of their lower bound."""
        include = [V(0, 1, 0), V(1, 0, 0), V(2, 0, 0)]

        ranges = compress_versions(include, MIXED_UNIVERSE)

        assert list(ranges) == sorted(ranges)
        covered = [expand_ranges([r], MIXED_UNIVERSE) for r in ranges]
        flat = [v for group in covered for v in group]
        assert len(flat) == len(set(flat))


@pytest.mark.unit
class TestCompressInterval:
    """Tests for compress_interval against an interpreter universe."""

    def test_closed_interval(self, interpreter_versions) -> None:
        """[0.2, 0.4] over 0.1..0.5 is the single range 0.2-0.4."""
        interval = VersionInterval(V(0, 2), V(0, 4), include_upper=True)

        assert _strings(compress_interval(interval, interpreter_versions)) == ["0.2-0.4"]

    def test_half_open_interval(self, interpreter_versions) -> None:
        """[0.2, 0.5) admits the same interpreter versions as [0.2, 0.4]."""
        interval = VersionInterval(V(0, 2), V(0, 5))

        assert _strings(compress_interval(interval, interpreter_versions)) == ["0.2-0.4"]

    def test_unbounded_interval_covers_everything(self, interpreter_versions) -> None:
        """An interval with no bounds compresses to the whole universe."""
        result = compress_interval(VersionInterval(), interpreter_versions)

        assert _strings(result) == ["0.1-0.5"]

    def test_interval_outside_universe_is_empty(self, interpreter_versions) -> None:
        """An interval admitting no known version compresses to nothing."""
        interval = VersionInterval(V(0, 6), V(0, 7))

        assert compress_interval(interval, interpreter_versions) == ()


@pytest.mark.unit
class TestExpandRanges:
    """Tests for expand_ranges."""

    def test_wildcard_range_admits_all(self) -> None:
        """A range of two empty prefixes admits every version."""
        wildcard = VersionRange.single(VersionPrefix(()))

        assert expand_ranges([wildcard], MIXED_UNIVERSE) == MIXED_UNIVERSE

    def test_no_ranges_admit_nothing(self) -> None:
        assert expand_ranges([], MIXED_UNIVERSE) == []

    def test_major_prefix(self) -> None:
        """A major-only prefix admits every version of that major."""
        major_one = VersionRange.single(VersionPrefix((1,)))

        assert expand_ranges([major_one], MIXED_UNIVERSE) == [
            V(1, 0, 0),
            V(1, 0, 1),
            V(1, 1, 0),
        ]
