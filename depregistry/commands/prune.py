"""Prune command implementation for depregistry.

Loads a metadata tree, prunes it to its fixed point and reports what was
removed without writing a registry. Useful for finding broken metadata
before a conversion.

Typical usage::

    $ depregistry prune METADATA
    $ depregistry prune METADATA --format json > prune.json
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import Any, Dict, List

import click

from depregistry.models import Registry
from depregistry.exceptions import DepRegistryError
from depregistry.context import pass_context, DepRegistryContext
from depregistry.core import MetadataLoader, PruneReport, RemovalReason, prune_registry
from depregistry.utils import (
    get_logger,
    get_raw_console,
    print_error,
    print_success,
    print_table,
)

logger = get_logger("commands.prune")


@click.command()
@click.argument(
    "metadata_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--details",
    is_flag=True,
    help="List every removed version, not just the totals.",
)
@pass_context
def prune(
    ctx: DepRegistryContext,
    metadata_dir: Path,
    output_format: str,
    details: bool,
) -> None:
    """Report versions and packages that pruning removes from METADATA_DIR.

    Exits with status 0 whether or not anything was removed.
    """
    config = ctx.get_config()
    try:
        registry = MetadataLoader.from_config(config).load_registry(metadata_dir)
        report = prune_registry(registry, config.interpreter_universe())
    except DepRegistryError as e:
        print_error(f"{e}")
        sys.exit(1)

    if output_format.lower() == "json":
        click.echo(json.dumps(_json_payload(report, registry), indent=2))
        return

    _display_table(report, registry, details=details)


def _json_payload(report: PruneReport, registry: Registry) -> Dict[str, Any]:
    payload = report.to_json()
    payload["surviving_packages"] = len(registry)
    payload["surviving_versions"] = sum(len(p.versions) for p in registry.values())
    return payload


def _display_table(report: PruneReport, registry: Registry, *, details: bool) -> None:
    console = get_raw_console()

    rows: List[Dict[str, Any]] = [
        {"Removed": reason.value.replace("_", " "), "Versions": report.count(reason)}
        for reason in RemovalReason
    ]
    rows.append({"Removed": "empty packages", "Versions": len(report.removed_packages)})
    print_table(
        rows,
        title="Prune Summary",
        caption=f"Converged after {report.passes} pass(es)",
        column_styles={"Versions": {"justify": "right"}},
    )

    if details and report.removed_versions:
        print_table(
            [
                {"Package": name, "Version": str(number), "Reason": reason.value}
                for name, number, reason in report.removed_versions
            ],
            title="Removed Versions",
        )

    surviving_versions = sum(len(p.versions) for p in registry.values())
    console.print(
        f"{len(registry)} package(s) with {surviving_versions} version(s) remain"
    )
    if not report.changed:
        print_success("Metadata is already consistent")
