"""
depregistry — Compatibility registry converter

depregistry reads a legacy metadata tree (one directory per package, one
sub-directory per released version) and produces a compact registry
description in which every compatibility fact is stated as a minimal set
of version ranges.

Features include:
    • Dependency-consistency pruning to a fixed point
    • Greedy version-range compression with exact round-trip guarantees
    • Uniform vs. per-version-range grouping of compatibility facts
    • Deterministic, namespace-scoped package UUIDs
"""

from __future__ import annotations

from depregistry.__version__ import __version__

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "depregistry Contributors"
__license__ = "Apache-2.0"
__description__ = (
    "Convert per-version package metadata trees into compact compatibility "
    "registries."
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
]
