"""Convert command implementation for depregistry.

Reads a metadata tree and writes the equivalent compressed registry.

The command runs the whole pipeline:

1. **MetadataLoader**: reads every package and version into a registry.
2. **prune_registry**: removes versions and packages that can never be
   part of a consistent install, repeating until nothing changes.
3. **aggregate_registry**: compresses each package's interpreter and
   dependency constraints into uniform lines or per-range tables.
4. **render_registry**: formats the facts as registry text.

Typical usage::

    # Write to a file (an existing file is backed up first)
    $ depregistry convert METADATA -o Registry.toml

    # Print to stdout, including dependency UUID tables
    $ depregistry convert METADATA --with-uuids

    # Dump the aggregated compatibility facts as JSON
    $ depregistry convert METADATA --format json > compat.json
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import List, Optional, Tuple

import click

from depregistry.models import PackageCompat
from depregistry.config import DepRegistryConfig
from depregistry.exceptions import DepRegistryError
from depregistry.context import pass_context, DepRegistryContext
from depregistry.core import (
    MetadataLoader,
    PruneReport,
    aggregate_registry,
    prune_registry,
    render_registry,
)
from depregistry.utils import (
    get_logger,
    print_error,
    print_success,
    print_warning,
    safe_write_file,
)

logger = get_logger("commands.convert")


@click.command()
@click.argument(
    "metadata_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the registry to this file instead of stdout.",
)
@click.option(
    "--backup/--no-backup",
    default=True,
    help="Back up an existing output file before replacing it.",
)
@click.option(
    "--with-uuids",
    is_flag=True,
    help="Also write a compat.uuids table for every package with dependencies.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["toml", "json"], case_sensitive=False),
    default="toml",
    help="Output format.",
)
@pass_context
def convert(
    ctx: DepRegistryContext,
    metadata_dir: Path,
    output: Optional[Path],
    backup: bool,
    with_uuids: bool,
    output_format: str,
) -> None:
    """Convert METADATA_DIR into a compressed compatibility registry.

    Versions with malformed numbers, no supported interpreter or an
    unsatisfiable dependency are dropped before conversion, as are packages
    left without versions. The dropped entries are summarised on stderr.
    """
    config = ctx.get_config()
    try:
        compats, report = build_registry(metadata_dir, config)
    except DepRegistryError as e:
        print_error(f"{e}")
        logger.debug("Conversion failed", exc_info=True)
        sys.exit(1)

    if report.changed:
        print_warning(report.summary())

    if output_format.lower() == "json":
        text = json.dumps([compat.to_json() for compat in compats], indent=2) + "\n"
    else:
        logger.info("Rendering %d package(s)", len(compats))
        text = render_registry(
            compats,
            interpreter_name=config.interpreter_name,
            include_uuids=with_uuids,
        )

    if output is None:
        click.echo(text, nl=False)
        return

    try:
        backup_path = safe_write_file(output, text, create_backup_file=backup)
    except DepRegistryError as e:
        print_error(f"{e}")
        sys.exit(1)

    if backup_path is not None:
        logger.info("Previous registry saved to %s", backup_path)
    print_success(f"Registry written to {output}")


def build_registry(
    metadata_dir: Path,
    config: DepRegistryConfig,
) -> Tuple[List[PackageCompat], PruneReport]:
    """Load, prune and aggregate ``metadata_dir``.

    Raises:
        DepRegistryError: The tree cannot be read or a file is malformed.
    """
    universe = config.interpreter_universe()

    registry = MetadataLoader.from_config(config).load_registry(metadata_dir)
    report: PruneReport = prune_registry(registry, universe)
    return aggregate_registry(registry, universe), report

