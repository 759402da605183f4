"""Loader for the legacy per-version metadata tree.

Expected layout::

    METADATA/
        Example/
            url                     # repository location (required)
            versions/
                0.1.0/
                    sha1            # content hash (required)
                    requires        # dependency declarations (optional)
                0.2.0/
                    ...

Directories without a ``url`` file are not packages and version
directories without a ``sha1`` file are not releases; both are skipped
silently. Version directory names that do not parse, or that alias an
already loaded version (``0.1`` and ``0.1.0``), are skipped with a
warning. Whether a loaded version is usable is the pruner's decision, not
the loader's.

The interpreter requirement is removed from each version's requirement map
and stored as the version's interpreter interval instead.

Typical usage::

    loader = MetadataLoader.from_config(load_config())
    registry = loader.load_registry(Path("METADATA"))
"""

from __future__ import annotations

from uuid import UUID
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Union

from packaging.version import InvalidVersion

from depregistry.core.reqs_parser import load_requires
from depregistry.core.identifier import derive_registry_namespace, derive_uuid
from depregistry.exceptions import FileOperationError, ParseError
from depregistry.models import Package, Registry, Version, VersionInterval, VersionNumber
from depregistry.utils import get_logger, list_subdirectories, read_text_if_exists
from depregistry.utils.version_utils import parse_version_number
from depregistry.constants import (
    DEFAULT_INTERPRETER_NAME,
    DEFAULT_INTERPRETER_RANGE,
    REQUIRES_FILENAME,
    SHA1_FILENAME,
    URL_FILENAME,
    VERSIONS_DIRNAME,
)

if TYPE_CHECKING:
    from depregistry.config import DepRegistryConfig


def _default_interpreter_interval() -> VersionInterval:
    lower, upper = DEFAULT_INTERPRETER_RANGE
    return VersionInterval(parse_version_number(lower), parse_version_number(upper))


class MetadataLoader:
    """Reads a metadata tree into a :data:`~depregistry.models.Registry`.

    Args:
        interpreter_name: Requirement name that constrains the interpreter.
        default_interpreter: Interval used when a version has no interpreter
            requirement.
        namespace: UUID namespace for package identifiers.
    """

    def __init__(
        self,
        *,
        interpreter_name: str = DEFAULT_INTERPRETER_NAME,
        default_interpreter: Optional[VersionInterval] = None,
        namespace: Optional[UUID] = None,
    ) -> None:
        self.logger = get_logger("loader")
        self.interpreter_name = interpreter_name
        self.default_interpreter = (
            default_interpreter
            if default_interpreter is not None
            else _default_interpreter_interval()
        )
        self.namespace = namespace if namespace is not None else derive_registry_namespace()

    @classmethod
    def from_config(cls, config: DepRegistryConfig) -> MetadataLoader:
        return cls(
            interpreter_name=config.interpreter_name,
            default_interpreter=config.default_interpreter_interval(),
            namespace=config.namespace(),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load_registry(self, root: Union[str, Path]) -> Registry:
        """Load every package under ``root``.

        Raises:
            FileOperationError: ``root`` is not a directory, or a file in the
                tree cannot be read.
            ParseError: A ``requires`` file is malformed, or the interpreter
                requirement carries platform tags.
        """
        root_path = Path(root)
        if not root_path.is_dir():
            raise FileOperationError(
                f"Metadata directory not found: {root_path}",
                file_path=str(root_path),
                operation="list",
            )

        registry: Registry = {}
        for package_dir in list_subdirectories(root_path):
            package = self.load_package(package_dir)
            if package is not None:
                registry[package_dir.name] = package

        self.logger.info(
            "Loaded %d package(s) with %d version(s) from %s",
            len(registry),
            sum(len(p.versions) for p in registry.values()),
            root_path,
        )
        return registry

    def load_package(self, package_dir: Path) -> Optional[Package]:
        """Load one package directory, or return ``None`` if it has no ``url``."""
        url = read_text_if_exists(package_dir / URL_FILENAME)
        if url is None:
            self.logger.debug("Skipping %s: no %s file", package_dir.name, URL_FILENAME)
            return None

        return Package(
            uuid=derive_uuid(self.namespace, package_dir.name),
            url=url.strip(),
            versions=self.load_versions(package_dir / VERSIONS_DIRNAME),
        )

    def load_versions(self, versions_dir: Path) -> Dict[VersionNumber, Version]:
        """Load every release directory below ``versions_dir``."""
        versions: Dict[VersionNumber, Version] = {}

        for version_dir in list_subdirectories(versions_dir):
            sha1 = read_text_if_exists(version_dir / SHA1_FILENAME)
            if sha1 is None:
                continue

            try:
                number = parse_version_number(version_dir.name)
            except InvalidVersion:
                self.logger.warning(
                    "Skipping %s: %r is not a version number",
                    versions_dir.parent.name,
                    version_dir.name,
                )
                continue

            if number in versions:
                self.logger.warning(
                    "Skipping %s %s: duplicates an already loaded version",
                    versions_dir.parent.name,
                    version_dir.name,
                )
                continue

            versions[number] = self.load_version(version_dir, sha1.strip())

        return versions

    def load_version(self, version_dir: Path, sha1: str) -> Version:
        """Build a :class:`Version` from a release directory."""
        requires_path = version_dir / REQUIRES_FILENAME
        requires = load_requires(requires_path)

        interpreter = requires.pop(self.interpreter_name, None)
        if interpreter is None:
            interval = self.default_interpreter
        elif interpreter.systems:
            raise ParseError(
                f"The {self.interpreter_name} requirement cannot be platform specific",
                file_path=str(requires_path),
            )
        else:
            interval = interpreter.versions

        return Version(sha1=sha1, interpreter=interval, requires=requires)


def load_registry(
    root: Union[str, Path],
    config: Optional[DepRegistryConfig] = None,
) -> Registry:
    """Load ``root`` with a loader built from ``config`` (defaults if ``None``)."""
    loader = MetadataLoader.from_config(config) if config is not None else MetadataLoader()
    return loader.load_registry(root)
