"""
Centralized constants for depregistry.

This module defines immutable configuration values used across depregistry,
including metadata tree layout, registry defaults, and logging formats.
All values are intended to be treated as read-only.
"""

from typing import Final, Sequence, Tuple

# ---------------------------------------------------------------------------
# Metadata tree layout
# ---------------------------------------------------------------------------

#: File holding a package's repository location.
URL_FILENAME: Final[str] = "url"

#: Directory holding one sub-directory per released version.
VERSIONS_DIRNAME: Final[str] = "versions"

#: File holding a version's content hash.
SHA1_FILENAME: Final[str] = "sha1"

#: Optional file holding a version's dependency declarations.
REQUIRES_FILENAME: Final[str] = "requires"

#: Prefix marking a platform tag in a dependency declaration.
PLATFORM_TAG_PREFIX: Final[str] = "@"

#: Comment marker in dependency declaration files.
COMMENT_MARKER: Final[str] = "#"

# ---------------------------------------------------------------------------
# Registry defaults
# ---------------------------------------------------------------------------

#: Name of the requirement that constrains the interpreter itself.
DEFAULT_INTERPRETER_NAME: Final[str] = "julia"

#: Finite universe of interpreter versions every range is compressed against.
DEFAULT_INTERPRETER_VERSIONS: Final[Sequence[str]] = (
    "0.1",
    "0.2",
    "0.3",
    "0.4",
    "0.5",
)

#: Interpreter interval assumed when a version declares none.
DEFAULT_INTERPRETER_RANGE: Final[Tuple[str, str]] = ("0.1", "0.6")

#: Domain hashed into the DNS namespace to derive the registry namespace.
DEFAULT_NAMESPACE_DOMAIN: Final[str] = "julialang.org"

# ---------------------------------------------------------------------------
# Configuration files
# ---------------------------------------------------------------------------

#: Standalone configuration file name.
CONFIG_FILENAME: Final[str] = "depregistry.toml"

#: Project file that may carry a ``[tool.depregistry]`` table.
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading metadata files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
