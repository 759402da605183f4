"""
Command-line interface for depregistry.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import click

from depregistry.config import load_config
from depregistry.__version__ import __version__
from depregistry.context import DepRegistryContext
from depregistry.exceptions import ConfigError, DepRegistryError
from depregistry.utils.console import print_error, print_warning, reconfigure_console
from depregistry.utils.logger import get_logger, level_for_verbosity, setup_logging

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="DEPREGISTRY_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="DEPREGISTRY_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="depregistry",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """depregistry — convert per-version package metadata into a compact registry.

    \b
    Available commands:
      depregistry convert METADATA    Write the compressed registry
      depregistry prune METADATA      Report what pruning would remove

    \b
    Examples:
      depregistry convert METADATA -o Registry.toml
      depregistry -v prune METADATA --format json

    Use ``depregistry COMMAND --help`` for command-specific options.
    """
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)

    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    registry_ctx = DepRegistryContext()
    registry_ctx.config_path = config or loaded_config.source_path
    registry_ctx.verbose = verbose
    registry_ctx.color = color
    registry_ctx.config = loaded_config
    ctx.obj = registry_ctx

    logger.debug("depregistry v%s", __version__)
    logger.debug("Config path: %s", registry_ctx.config_path)
    logger.debug("Configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


# Register CLI subcommands
from depregistry.commands.convert import convert  # noqa: E402
from depregistry.commands.prune import prune  # noqa: E402

cli.add_command(convert)
cli.add_command(prune)


def main() -> int:
    """Main entry point for the depregistry CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        result = cli(standalone_mode=False)
        return result if isinstance(result, int) else 0

    except click.exceptions.Exit as exc:
        return exc.exit_code

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Abort:
        print_warning("Operation cancelled by user")
        return 130

    except DepRegistryError as exc:
        print_error(str(exc))
        logger.debug(
            "DepRegistryError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
