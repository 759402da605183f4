from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from depregistry.core.identifier import derive_registry_namespace, derive_uuid
from depregistry.models import (
    Package,
    Require,
    Version,
    VersionInterval,
    VersionNumber,
)

# Signature of the ``write_package`` fixture:
#   write_package(name, url, {version_dir: (sha1, requires_text_or_None)})
WritePackage = Callable[[str, Optional[str], Dict[str, tuple]], Path]


@pytest.fixture
def write_package(tmp_path: Path) -> WritePackage:
    """Return a helper that writes one package into ``tmp_path / "METADATA"``.

    Passing ``url=None`` leaves the ``url`` file out; passing ``sha1=None``
    leaves a version's ``sha1`` file out.
    """
    root = tmp_path / "METADATA"
    root.mkdir(exist_ok=True)

    def _write(name: str, url: Optional[str], versions: Dict[str, tuple]) -> Path:
        package_dir = root / name
        package_dir.mkdir()
        if url is not None:
            (package_dir / "url").write_text(url + "\n", encoding="utf-8")
        for version, (sha1, requires) in versions.items():
            version_dir = package_dir / "versions" / version
            version_dir.mkdir(parents=True)
            if sha1 is not None:
                (version_dir / "sha1").write_text(sha1 + "\n", encoding="utf-8")
            if requires is not None:
                (version_dir / "requires").write_text(requires, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def sample_metadata(write_package: WritePackage) -> Path:
    """A small tree: ``Example`` depends on ``Lib``; ``Broken`` needs a missing package."""
    write_package(
        "Example",
        "https://example.com/Example.jl.git",
        {
            "0.1.0": ("a1", "julia 0.3\nLib 0.1\n"),
            "0.2.0": ("a2", "julia 0.3\nLib 0.2\n"),
        },
    )
    write_package(
        "Lib",
        "https://example.com/Lib.jl.git",
        {
            "0.1.0": ("b1", None),
            "0.2.0": ("b2", None),
        },
    )
    return write_package(
        "Broken",
        "https://example.com/Broken.jl.git",
        {"1.0.0": ("c1", "Missing\n")},
    )


def expected_sample_registry() -> str:
    """Registry text ``sample_metadata`` converts to with default settings."""
    namespace = derive_registry_namespace()
    return (
        "[Example]\n"
        f'uuid = "{derive_uuid(namespace, "Example")}"\n'
        'repo = "https://example.com/Example.jl.git"\n'
        'julia = "0.3-0.5"\n'
        "\n"
        "\t[Example.versions.sha1]\n"
        '\t"0.1.0" = "a1"\n'
        '\t"0.2.0" = "a2"\n'
        "\n"
        "\t[Example.compat.versions.Lib]\n"
        '\t"0.1" = "0.1-0.2"\n'
        '\t"0.2" = "0.2"\n'
        "\n"
        "[Lib]\n"
        f'uuid = "{derive_uuid(namespace, "Lib")}"\n'
        'repo = "https://example.com/Lib.jl.git"\n'
        'julia = "0.1-0.5"\n'
        "\n"
        "\t[Lib.versions.sha1]\n"
        '\t"0.1.0" = "b1"\n'
        '\t"0.2.0" = "b2"\n'
        "\n"
    )


@pytest.fixture
def interpreter_versions() -> list:
    """The default interpreter universe, 0.1 through 0.5."""
    return [VersionNumber(0, minor) for minor in range(1, 6)]


def make_version(
    interpreter: Optional[VersionInterval] = None,
    requires: Optional[Dict[str, Require]] = None,
    sha1: str = "0" * 40,
) -> Version:
    """Build a :class:`Version` with the default interpreter interval."""
    return Version(
        sha1=sha1,
        interpreter=interpreter or VersionInterval(VersionNumber(0, 1), VersionNumber(0, 6)),
        requires=dict(requires or {}),
    )


def make_package(name: str, versions: Dict[VersionNumber, Version]) -> Package:
    return Package(
        uuid=derive_uuid(derive_registry_namespace(), name),
        url=f"https://example.com/{name}.jl.git",
        versions=dict(versions),
    )
