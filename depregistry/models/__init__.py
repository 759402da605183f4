"""
Unified data model exports for depregistry.

Example:
    >>> from depregistry.models import Package, VersionNumber, VersionRange
"""

from __future__ import annotations

from depregistry.models.compat import PackageCompat, RangeTable
from depregistry.models.package import Package, Registry, Require, Version, sort_names
from depregistry.models.version import (
    ZERO_VERSION,
    VersionInterval,
    VersionNumber,
    VersionPrefix,
    VersionRange,
    VersionRanges,
)

__all__ = [
    "Package",
    "PackageCompat",
    "RangeTable",
    "Registry",
    "Require",
    "Version",
    "VersionInterval",
    "VersionNumber",
    "VersionPrefix",
    "VersionRange",
    "VersionRanges",
    "ZERO_VERSION",
    "sort_names",
]
