"""
Version string parsing for depregistry.

Version directory names and requirement bounds are parsed with PEP 440
rules from :mod:`packaging` and reduced to
:class:`~depregistry.models.version.VersionNumber` values.
"""

from __future__ import annotations

from typing import Tuple

from packaging.version import InvalidVersion, Version

from depregistry.models.version import VersionNumber

#: Trailing marker meaning "the lowest pre-release of" in requirement bounds.
_PRERELEASE_FLOOR_MARKER = "-"


def parse_version_number(text: str) -> VersionNumber:
    """Parse a version string such as ``"0.3"``, ``"v1.2.3"`` or ``"1.0.0-rc1"``.

    Missing minor and patch components default to zero. Pre/post/dev/local
    segments are kept in :attr:`VersionNumber.suffix`, so ``"1.0.0-rc1"``
    parses but is not canonical.

    Raises:
        InvalidVersion: The text is not a version, has an epoch, or has more
            than three release components.

    Examples:
        >>> parse_version_number("0.3")
        VersionNumber(major=0, minor=3, patch=0, suffix='')
        >>> str(parse_version_number("1.0.0-rc1"))
        '1.0.0rc1'
    """
    parsed = _parse_version(text.strip())

    if parsed.epoch or len(parsed.release) > 3:
        raise InvalidVersion(text)

    major, minor, patch = _normalize_release(parsed)
    suffix = str(parsed)[len(parsed.base_version):]
    return VersionNumber(major, minor, patch, suffix)


def parse_version_bound(text: str) -> VersionNumber:
    """Parse a requirement bound, accepting a trailing ``-`` floor marker.

    ``"0.3-"`` means "from the first pre-release of 0.3.0". Only plain
    releases survive pruning, and for those ``0.3-`` and ``0.3`` admit the
    same versions, so the marker is dropped.
    """
    value = text.strip()
    if value.endswith(_PRERELEASE_FLOOR_MARKER):
        value = value[: -len(_PRERELEASE_FLOOR_MARKER)]
    return parse_version_number(value)


def _parse_version(value: str) -> Version:
    """Parse a version string into a PEP 440 Version object."""
    if not value:
        raise InvalidVersion(value)
    return Version(value)


def _normalize_release(version: Version) -> Tuple[int, int, int]:
    """Normalize a version's release segment to (major, minor, patch)."""
    release = version.release
    major = release[0] if len(release) > 0 else 0
    minor = release[1] if len(release) > 1 else 0
    patch = release[2] if len(release) > 2 else 0
    return major, minor, patch
