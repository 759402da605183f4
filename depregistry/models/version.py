"""
Version value types for depregistry.

Four value types describe versions and sets of versions:

- :class:`VersionNumber`: a concrete ``major.minor.patch`` release, with an
  optional suffix for pre/post/dev/local releases found in source trees.
- :class:`VersionPrefix`: a partial version of arity 0 to 3 used as a
  range boundary (``()`` is unbounded, ``(1,)`` is "major 1",
  ``(1, 2)`` is "1.2.*" and ``(1, 2, 3)`` is exact).
- :class:`VersionRange`: an inclusive pair of prefixes, the unit of
  compressed output.
- :class:`VersionInterval`: a concrete ``[lower, upper)`` (or closed)
  bound on versions, the unit of source constraints.

All of them are immutable and hashable so they can be used as mapping
keys while grouping compatibility facts.
"""

from __future__ import annotations

from functools import total_ordering
from dataclasses import dataclass, field
from typing import Optional, Tuple

from packaging.version import Version as PkgVersion

from depregistry.exceptions import ContractViolationError

#: Largest arity a :class:`VersionPrefix` may have.
MAX_PREFIX_ARITY = 3


@total_ordering
@dataclass(frozen=True)
class VersionNumber:
    """A concrete release version.

    Attributes:
        major: Major component.
        minor: Minor component.
        patch: Patch component.
        suffix: Normalized PEP 440 pre/post/dev/local segment (``"rc1"``,
            ``"+build"``), empty for a plain release.
    """

    major: int
    minor: int = 0
    patch: int = 0
    suffix: str = ""

    def __post_init__(self) -> None:
        for part in (self.major, self.minor, self.patch):
            if not isinstance(part, int) or part < 0:
                raise ValueError(
                    f"Version components must be non-negative integers: {self.triple}"
                )

    @property
    def triple(self) -> Tuple[int, int, int]:
        """The ``(major, minor, patch)`` components."""
        return (self.major, self.minor, self.patch)

    @property
    def is_canonical(self) -> bool:
        """True when the version is a plain release with no suffix."""
        return not self.suffix

    def this_patch(self) -> VersionNumber:
        """Return the plain release this version belongs to."""
        return VersionNumber(self.major, self.minor, self.patch)

    def _sort_key(self) -> PkgVersion:
        return PkgVersion(str(self))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VersionNumber):
            return NotImplemented
        if not self.suffix and not other.suffix:
            return self.triple < other.triple
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}{self.suffix}"


@dataclass(frozen=True, order=True)
class VersionPrefix:
    """A partial version used as a range boundary.

    The arity decides how many leading components of a version are
    compared against it; see :mod:`depregistry.core.comparator`.
    """

    parts: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if len(self.parts) > MAX_PREFIX_ARITY:
            raise ContractViolationError(
                f"Version prefix arity must be 0-{MAX_PREFIX_ARITY}, got {self.parts}",
                operation="VersionPrefix",
            )
        object.__setattr__(self, "parts", tuple(self.parts))

    @classmethod
    def of(cls, version: VersionNumber, arity: int) -> VersionPrefix:
        """Return the first ``arity`` components of ``version`` as a prefix."""
        return cls(version.triple[:arity])

    @property
    def arity(self) -> int:
        return len(self.parts)

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.parts)


@dataclass(frozen=True, order=True)
class VersionRange:
    """Inclusive range between two prefixes."""

    low: VersionPrefix
    high: VersionPrefix

    @classmethod
    def single(cls, prefix: VersionPrefix) -> VersionRange:
        return cls(prefix, prefix)

    def __str__(self) -> str:
        if self.low.arity == 0 and self.high.arity == 0:
            return "*"
        if self.low == self.high:
            return str(self.low)
        return f"{self.low}-{self.high}"


#: An ordered list of ranges, as produced by the range compressor.
VersionRanges = Tuple[VersionRange, ...]

#: The smallest version, used as the default lower bound.
ZERO_VERSION = VersionNumber(0, 0, 0)


@dataclass(frozen=True)
class VersionInterval:
    """Concrete bound on versions, ``[lower, upper)`` by default.

    Attributes:
        lower: Inclusive lower bound.
        upper: Upper bound, or ``None`` for no upper bound.
        include_upper: Make the upper bound inclusive.
    """

    lower: VersionNumber = field(default=ZERO_VERSION)
    upper: Optional[VersionNumber] = None
    include_upper: bool = False

    def __contains__(self, version: object) -> bool:
        if not isinstance(version, VersionNumber):
            return False
        if version < self.lower:
            return False
        if self.upper is None:
            return True
        if self.include_upper:
            return version <= self.upper
        return version < self.upper

    def is_empty(self) -> bool:
        """True when no version at all can satisfy the interval."""
        if self.upper is None:
            return False
        if self.include_upper:
            return self.upper < self.lower
        return self.upper <= self.lower

    def intersect(self, other: VersionInterval) -> VersionInterval:
        """Return the interval admitted by both ``self`` and ``other``."""
        lower = max(self.lower, other.lower)

        if self.upper is None:
            upper, include_upper = other.upper, other.include_upper
        elif other.upper is None or self.upper < other.upper:
            upper, include_upper = self.upper, self.include_upper
        elif other.upper < self.upper:
            upper, include_upper = other.upper, other.include_upper
        else:
            upper = self.upper
            include_upper = self.include_upper and other.include_upper

        return VersionInterval(lower, upper, include_upper)

    def __str__(self) -> str:
        if self.upper is None:
            return f"[{self.lower}, ∞)"
        closing = "]" if self.include_upper else ")"
        return f"[{self.lower}, {self.upper}{closing}"
