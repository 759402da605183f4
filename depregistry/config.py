"""Configuration file loader for depregistry.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``depregistry.toml`` — settings under ``[depregistry]`` table
- ``pyproject.toml`` — settings under ``[tool.depregistry]`` table

Discovery order:

1. Explicit path from ``--config`` or ``DEPREGISTRY_CONFIG``
2. ``depregistry.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.depregistry]`` section

Example (``depregistry.toml``)::

    [depregistry]
    interpreter_name = "julia"
    interpreter_versions = ["0.3", "0.4", "0.5", "0.6"]
    default_interpreter_range = ["0.3", "0.7"]
    namespace_domain = "julialang.org"
"""

from __future__ import annotations

import tomli as tomllib
from uuid import UUID
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from packaging.version import InvalidVersion

from depregistry.exceptions import ConfigError
from depregistry.utils.logger import get_logger
from depregistry.core.identifier import derive_registry_namespace
from depregistry.models.version import VersionInterval, VersionNumber
from depregistry.utils.version_utils import parse_version_number
from depregistry.constants import (
    CONFIG_FILENAME,
    PYPROJECT_FILENAME,
    DEFAULT_INTERPRETER_NAME,
    DEFAULT_INTERPRETER_RANGE,
    DEFAULT_INTERPRETER_VERSIONS,
    DEFAULT_NAMESPACE_DOMAIN,
)

logger = get_logger("config")

_SECTION = "depregistry"


@dataclass
class DepRegistryConfig:
    """Parsed and validated depregistry configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        interpreter_name: Requirement name that constrains the interpreter
            rather than a package (``julia`` in the source trees).
        interpreter_versions: Every interpreter version known to exist.
            Interpreter constraints are compressed against this set.
        default_interpreter_range: ``[lower, upper)`` assumed when a version
            declares no interpreter requirement.
        namespace_domain: Domain the package UUID namespace is derived from.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    interpreter_name: str = DEFAULT_INTERPRETER_NAME
    interpreter_versions: Tuple[str, ...] = tuple(DEFAULT_INTERPRETER_VERSIONS)
    default_interpreter_range: Tuple[str, str] = DEFAULT_INTERPRETER_RANGE
    namespace_domain: str = DEFAULT_NAMESPACE_DOMAIN

    source_path: Optional[Path] = field(default=None, repr=False)

    def interpreter_universe(self) -> List[VersionNumber]:
        """Known interpreter versions, parsed and sorted."""
        return sorted(parse_version_number(v) for v in self.interpreter_versions)

    def default_interpreter_interval(self) -> VersionInterval:
        lower, upper = self.default_interpreter_range
        return VersionInterval(parse_version_number(lower), parse_version_number(upper))

    def namespace(self) -> UUID:
        """UUID namespace package identifiers are derived in."""
        return derive_registry_namespace(self.namespace_domain)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging."""
        return {
            "interpreter_name": self.interpreter_name,
            "interpreter_versions": list(self.interpreter_versions),
            "default_interpreter_range": list(self.default_interpreter_range),
            "namespace_domain": self.namespace_domain,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    standalone = cwd / CONFIG_FILENAME
    if standalone.is_file():
        logger.debug("Found %s: %s", CONFIG_FILENAME, standalone)
        return standalone

    pyproject = cwd / PYPROJECT_FILENAME
    if pyproject.is_file() and _pyproject_has_section(pyproject):
        logger.debug("Found [tool.%s] in %s", _SECTION, pyproject)
        return pyproject

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check whether ``pyproject.toml`` carries a ``[tool.depregistry]`` table.

    An unreadable or invalid ``pyproject.toml`` is treated as having no
    section; it is not ours to validate.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return False
    return _SECTION in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> DepRegistryConfig:
    """Load and validate depregistry configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`DepRegistryConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return DepRegistryConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == PYPROJECT_FILENAME:
        section = raw.get("tool", {}).get(_SECTION, {})
    else:
        section = raw.get(_SECTION, {})

    if not section:
        logger.debug("Config file found but no %s section, using defaults", _SECTION)
        return DepRegistryConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> DepRegistryConfig:
    """Validate a ``[depregistry]`` table and build a config from it.

    Raises:
        ConfigError: Unknown keys, wrong types or unparseable versions.
    """
    config = DepRegistryConfig()

    known = {
        "interpreter_name",
        "interpreter_versions",
        "default_interpreter_range",
        "namespace_domain",
    }
    unknown = set(section) - known
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    for option in ("interpreter_name", "namespace_domain"):
        if option in section:
            val = section[option]
            if not isinstance(val, str) or not val.strip():
                raise ConfigError(
                    f"{option} must be a non-empty string, got {val!r}",
                    config_path=config_path,
                    option=option,
                )
            setattr(config, option, val.strip())

    if "interpreter_versions" in section:
        versions = _version_list(
            section["interpreter_versions"],
            option="interpreter_versions",
            config_path=config_path,
        )
        if not versions:
            raise ConfigError(
                "interpreter_versions must not be empty",
                config_path=config_path,
                option="interpreter_versions",
            )
        config.interpreter_versions = tuple(versions)

    if "default_interpreter_range" in section:
        bounds = _version_list(
            section["default_interpreter_range"],
            option="default_interpreter_range",
            config_path=config_path,
        )
        if len(bounds) != 2:
            raise ConfigError(
                "default_interpreter_range must have exactly two versions "
                f"[lower, upper], got {len(bounds)}",
                config_path=config_path,
                option="default_interpreter_range",
            )
        config.default_interpreter_range = (bounds[0], bounds[1])
        if config.default_interpreter_interval().is_empty():
            raise ConfigError(
                "default_interpreter_range lower bound must be below its upper "
                f"bound, got {bounds!r}",
                config_path=config_path,
                option="default_interpreter_range",
            )

    return config


def _version_list(value: Any, *, option: str, config_path: str) -> List[str]:
    """Check that ``value`` is a list of plain release version strings.

    Pre/post/dev/local versions are rejected; range compression only
    distinguishes ``major.minor.patch``.
    """
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(
            f"{option} must be a list of version strings, got {type(value).__name__}",
            config_path=config_path,
            option=option,
        )
    for item in value:
        try:
            parsed = parse_version_number(item)
        except InvalidVersion as exc:
            raise ConfigError(
                f"{option} contains an invalid version: {item!r}",
                config_path=config_path,
                option=option,
            ) from exc
        if not parsed.is_canonical:
            raise ConfigError(
                f"{option} must list plain releases, got {item!r}",
                config_path=config_path,
                option=option,
            )
    return list(value)
