"""
Partial order between concrete versions and version prefixes.

A prefix of arity ``k`` only looks at the first ``k`` components of a
version, so ``(1, 2)`` sits at or above every ``1.2.x`` and at or below
every ``1.2.x`` at the same time. That is what lets a range written as
``1.2-1.4`` cover all patch releases of 1.2 through 1.4 without naming
them. The empty prefix compares true against everything.

Prefixes are never compared with each other, only with versions.
"""

from __future__ import annotations

from depregistry.models.version import VersionNumber, VersionPrefix, VersionRange


def compare_to_prefix(version: VersionNumber, prefix: VersionPrefix) -> int:
    """Three-way compare ``version`` against ``prefix`` at the prefix's arity.

    Returns:
        ``-1`` if the version lies below the prefix, ``0`` if it matches the
        prefix on every component the prefix specifies, ``1`` if above.
    """
    head = version.triple[: prefix.arity]
    return (head > prefix.parts) - (head < prefix.parts)


def version_le_prefix(version: VersionNumber, prefix: VersionPrefix) -> bool:
    """``version ≲ prefix``."""
    return compare_to_prefix(version, prefix) <= 0


def prefix_le_version(prefix: VersionPrefix, version: VersionNumber) -> bool:
    """``prefix ≲ version``."""
    return compare_to_prefix(version, prefix) >= 0


def in_range(version: VersionNumber, low: VersionPrefix, high: VersionPrefix) -> bool:
    """``low ≲ version ≲ high``."""
    return prefix_le_version(low, version) and version_le_prefix(version, high)


def range_contains(version_range: VersionRange, version: VersionNumber) -> bool:
    """True if ``version`` falls inside the inclusive ``version_range``."""
    return in_range(version, version_range.low, version_range.high)
