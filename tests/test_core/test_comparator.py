"""Unit tests for depregistry.core.comparator."""

from __future__ import annotations

import pytest

from depregistry.core.comparator import (
    compare_to_prefix,
    in_range,
    prefix_le_version,
    range_contains,
    version_le_prefix,
)
from depregistry.models import VersionNumber, VersionPrefix, VersionRange

V = VersionNumber
P = VersionPrefix


@pytest.mark.unit
class TestCompareToPrefix:
    """Tests for compare_to_prefix."""

    @pytest.mark.parametrize(
        "version, prefix, expected",
        [
            (V(1, 5, 0), P(()), 0),
            (V(1, 5, 0), P((1,)), 0),
            (V(2, 0, 0), P((1,)), 1),
            (V(0, 9, 9), P((1,)), -1),
            (V(1, 2, 7), P((1, 2)), 0),
            (V(1, 3, 0), P((1, 2)), 1),
            (V(1, 1, 9), P((1, 2)), -1),
            (V(1, 2, 3), P((1, 2, 3)), 0),
            (V(1, 2, 4), P((1, 2, 3)), 1),
            (V(1, 2, 2), P((1, 2, 3)), -1),
        ],
    )
    def test_three_way_comparison(self, version, prefix, expected) -> None:
        """Only the first ``arity`` components take part in the comparison."""
        assert compare_to_prefix(version, prefix) == expected


@pytest.mark.unit
class TestPrefixOrdering:
    """Tests for the two directional comparisons and ranges."""

    def test_empty_prefix_is_both_above_and_below(self) -> None:
        """The empty prefix compares true against every version."""
        for version in (V(0, 0, 0), V(3, 1, 4), V(99, 0, 0)):
            assert version_le_prefix(version, P(()))
            assert prefix_le_version(P(()), version)

    def test_matching_prefix_is_both_above_and_below(self) -> None:
        """1.5.0 ≲ (1,) and (1,) ≲ 1.5.0 both hold."""
        assert version_le_prefix(V(1, 5, 0), P((1,)))
        assert prefix_le_version(P((1,)), V(1, 5, 0))

    def test_higher_major_is_not_below_prefix(self) -> None:
        assert not version_le_prefix(V(2, 0, 0), P((1,)))
        assert prefix_le_version(P((1,)), V(2, 0, 0))

    def test_in_range_is_inclusive_at_prefix_granularity(self) -> None:
        """1.2-1.4 admits every patch of 1.2 through 1.4."""
        low, high = P((1, 2)), P((1, 4))

        assert in_range(V(1, 2, 0), low, high)
        assert in_range(V(1, 4, 9), low, high)
        assert not in_range(V(1, 1, 9), low, high)
        assert not in_range(V(1, 5, 0), low, high)

    def test_range_contains_uses_both_bounds(self) -> None:
        version_range = VersionRange(P((0, 2)), P((0, 2, 1)))

        assert range_contains(version_range, V(0, 2, 0))
        assert range_contains(version_range, V(0, 2, 1))
        assert not range_contains(version_range, V(0, 2, 2))
