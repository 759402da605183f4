"""
Core functionality exports for depregistry.

The conversion pipeline, leaf first:

    from depregistry.core import (
        MetadataLoader,      # metadata tree -> Registry
        prune_registry,      # Registry -> consistent Registry (in place)
        aggregate_registry,  # Registry -> [PackageCompat]
        render_registry,     # [PackageCompat] -> registry text
    )
"""

from __future__ import annotations

from depregistry.core.identifier import (
    NAMESPACE_DNS,
    derive_registry_namespace,
    derive_uuid,
)
from depregistry.core.comparator import (
    compare_to_prefix,
    in_range,
    prefix_le_version,
    range_contains,
    version_le_prefix,
)
from depregistry.core.compressor import compress_interval, compress_versions, expand_ranges
from depregistry.core.grouping import flatten_keys, invert_grouped, invert_map
from depregistry.core.pruner import PruneReport, RemovalReason, prune_pass, prune_registry
from depregistry.core.aggregator import (
    aggregate_package,
    aggregate_registry,
    compat_interpreter,
    compat_versions,
)
from depregistry.core.reqs_parser import (
    RequirementLine,
    combine_requires,
    load_requires,
    parse_requires,
)
from depregistry.core.loader import MetadataLoader, load_registry
from depregistry.core.emitter import render_package, render_registry, versions_repr

__all__ = [
    # Identifiers
    "NAMESPACE_DNS",
    "derive_uuid",
    "derive_registry_namespace",
    # Comparator
    "compare_to_prefix",
    "in_range",
    "prefix_le_version",
    "range_contains",
    "version_le_prefix",
    # Compression & grouping
    "compress_versions",
    "compress_interval",
    "expand_ranges",
    "invert_map",
    "invert_grouped",
    "flatten_keys",
    # Pruning
    "PruneReport",
    "RemovalReason",
    "prune_pass",
    "prune_registry",
    # Aggregation
    "aggregate_package",
    "aggregate_registry",
    "compat_interpreter",
    "compat_versions",
    # Input / output
    "RequirementLine",
    "combine_requires",
    "load_requires",
    "parse_requires",
    "MetadataLoader",
    "load_registry",
    "render_package",
    "render_registry",
    "versions_repr",
]
