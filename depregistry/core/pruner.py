"""Dependency-consistency pruning for a package registry.

The pruner deletes every version that cannot take part in a consistent
registry and every package left without versions. A version is removed
when:

1. **Non-canonical**: its number carries a pre/post/dev/local suffix or
   is not greater than ``0.0.0``.
2. **No interpreter**: its interpreter interval admits none of the known
   interpreter versions.
3. **Unsatisfied dependency**: it requires a package that is absent, or
   none of whose remaining versions satisfies the constraint.

Removing a version can invalidate versions of other packages that
depended on it, so passes are repeated until one removes nothing. The set
only ever shrinks, so this terminates after at most one pass per version
and package plus a final clean pass. Removals are the normal operating
mode here, not errors; they are logged and collected in a
:class:`PruneReport`.

Typical usage::

    registry = load_registry(metadata_dir)
    report = prune_registry(registry, config.interpreter_universe())
    print(report.summary())
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from depregistry.utils.logger import get_logger
from depregistry.models.version import ZERO_VERSION, VersionNumber
from depregistry.models.package import Registry, Version

logger = get_logger("pruner")

__all__ = [
    "RemovalReason",
    "PruneReport",
    "removal_reason",
    "prune_pass",
    "prune_registry",
]


class RemovalReason(Enum):
    """Why a version was removed from the registry."""

    NON_CANONICAL = "non_canonical"
    NO_INTERPRETER = "no_interpreter"
    UNSATISFIED_DEPENDENCY = "unsatisfied_dependency"


@dataclass
class PruneReport:
    """Outcome of pruning a registry to its fixed point.

    Attributes:
        passes: Number of passes run, including the final clean one.
        removed_versions: ``(package, version, reason)`` for every removal,
            in the order they happened.
        removed_packages: Packages deleted because no versions remained.
    """

    passes: int = 0
    removed_versions: List[Tuple[str, VersionNumber, RemovalReason]] = field(
        default_factory=list
    )
    removed_packages: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """True if anything at all was removed."""
        return bool(self.removed_versions or self.removed_packages)

    def count(self, reason: RemovalReason) -> int:
        """Number of versions removed for ``reason``."""
        return sum(1 for _, _, why in self.removed_versions if why is reason)

    def counts_by_reason(self) -> Dict[str, int]:
        return {reason.value: self.count(reason) for reason in RemovalReason}

    def summary(self) -> str:
        """One-line human-readable summary."""
        parts = ", ".join(
            f"{count} {reason.replace('_', ' ')}"
            for reason, count in self.counts_by_reason().items()
            if count
        )
        detail = f" ({parts})" if parts else ""
        return (
            f"Removed {len(self.removed_versions)} version(s){detail} and "
            f"{len(self.removed_packages)} package(s) in {self.passes} pass(es)"
        )

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "passes": self.passes,
            "removed_versions": [
                {"package": name, "version": str(number), "reason": reason.value}
                for name, number, reason in self.removed_versions
            ],
            "removed_packages": list(self.removed_packages),
            "counts": self.counts_by_reason(),
        }


def removal_reason(
    number: VersionNumber,
    version: Version,
    registry: Registry,
    interpreter_versions: Sequence[VersionNumber],
) -> Optional[RemovalReason]:
    """Return why ``version`` must be removed, or ``None`` if it survives.

    Dependencies are checked against the registry as it is right now, so a
    pass sees the removals made earlier in the same pass.
    """
    if not (number.is_canonical and number > ZERO_VERSION):
        return RemovalReason.NON_CANONICAL

    if not any(v in version.interpreter for v in interpreter_versions):
        return RemovalReason.NO_INTERPRETER

    for name, require in version.requires.items():
        dependency = registry.get(name)
        if dependency is None or not any(
            require.is_satisfied_by(candidate) for candidate in dependency.versions
        ):
            return RemovalReason.UNSATISFIED_DEPENDENCY

    return None


def prune_pass(
    registry: Registry,
    interpreter_versions: Sequence[VersionNumber],
    report: Optional[PruneReport] = None,
) -> bool:
    """Run one pruning pass over ``registry`` in place.

    Returns:
        ``True`` if the pass removed nothing (the registry is clean).
    """
    clean = True

    for name in list(registry):
        package = registry[name]

        for number in sorted(package.versions):
            reason = removal_reason(
                number, package.versions[number], registry, interpreter_versions
            )
            if reason is None:
                continue

            del package.versions[number]
            clean = False
            logger.debug("Removed %s %s (%s)", name, number, reason.value)
            if report is not None:
                report.removed_versions.append((name, number, reason))

        if not package.versions:
            del registry[name]
            clean = False
            logger.debug("Removed package %s (no versions left)", name)
            if report is not None:
                report.removed_packages.append(name)

    return clean


def prune_registry(
    registry: Registry,
    interpreter_versions: Sequence[VersionNumber],
) -> PruneReport:
    """Prune ``registry`` in place until a pass removes nothing.

    Args:
        registry: Registry to prune; entries are deleted from it.
        interpreter_versions: Finite set of known interpreter versions.

    Returns:
        A :class:`PruneReport` describing every removal.
    """
    interpreter_versions = sorted(interpreter_versions)
    report = PruneReport()

    while True:
        report.passes += 1
        before = len(report.removed_versions) + len(report.removed_packages)
        clean = prune_pass(registry, interpreter_versions, report)
        after = len(report.removed_versions) + len(report.removed_packages)
        logger.debug("Pass %d removed %d entr(ies)", report.passes, after - before)
        if clean:
            break

    logger.info(
        "%s; %d package(s) remain",
        report.summary(),
        len(registry),
    )
    return report
