"""
depregistry version information.

This module provides a single source of truth for the package version.
It follows PEP 440 (``MAJOR.MINOR.PATCH[.devN]``).
"""

from __future__ import annotations

from packaging.version import Version

# ---------------------------------------------------------------------------
# Main version (single source of truth)
# ---------------------------------------------------------------------------

__version__ = "0.1.0.dev0"

#: Parsed form of ``__version__`` for programmatic comparisons.
VERSION_INFO = Version(__version__)

# ---------------------------------------------------------------------------
# Human-readable version (for CLI)
# ---------------------------------------------------------------------------

VERSION_STRING = f"depregistry {__version__}"
