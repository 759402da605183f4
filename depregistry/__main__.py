"""
Executable module for depregistry.

Running:
    python -m depregistry

is equivalent to:
    depregistry
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Explain on stderr why the CLI could not be imported."""
    sys.stderr.write("depregistry CLI could not be started.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from depregistry.__version__ import __version__

        sys.stderr.write(f"depregistry version: {__version__}\n")
    except ImportError:
        sys.stderr.write("depregistry version: <unknown>\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Main entrypoint when executing ``python -m depregistry``.

    Returns:
        Exit code returned by the CLI, or 1 if it cannot be imported.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from depregistry.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
