"""Registry text rendering.

Renders :class:`~depregistry.models.PackageCompat` facts in the registry's
TOML layout. For a package ``Example`` the output looks like::

    [Example]
    uuid = "148144aa-62c4-564b-a36c-3219792cc9f9"
    repo = "https://github.com/JuliaLang/Example.jl.git"
    julia = "0.4-0.5"

    	[Example.versions.sha1]
    	"0.4.0" = "a8a4d6e0a0e3b5b8..."
    	"0.5.0" = "c7a8ffa5b2f4e3d9..."

    	[Example.compat.versions]
    	Compat = "0.7-0.9"

    	[Example.compat.versions.BinDeps]
    	"0.4" = "0.3"
    	"0.5" = ["0.3.1", "0.4"]

The interpreter line is written once when every version agrees; otherwise
a ``[Example.julia]`` table follows the hashes. Packages and sections are
written in the order the aggregator produced them.
"""

from __future__ import annotations

from typing import Iterable, List

from depregistry.constants import DEFAULT_INTERPRETER_NAME
from depregistry.models import PackageCompat, RangeTable, VersionRanges


def versions_repr(ranges: VersionRanges) -> str:
    """Quote a range list: one range as a string, several as a list."""
    if len(ranges) == 1:
        return _quote(ranges[0])
    return "[" + ", ".join(_quote(r) for r in ranges) + "]"


def _quote(value: object) -> str:
    return f'"{value}"'


def render_package(
    compat: PackageCompat,
    *,
    interpreter_name: str = DEFAULT_INTERPRETER_NAME,
    include_uuids: bool = False,
) -> str:
    """Render every section for one package.

    Args:
        compat: Facts produced by the aggregator.
        interpreter_name: Key used for the interpreter line and table.
        include_uuids: Also write a ``[<name>.compat.uuids]`` table mapping
            each dependency name to its identifier.
    """
    name = compat.name
    lines: List[str] = [
        f"[{name}]",
        f"uuid = {_quote(compat.uuid)}",
        f"repo = {_quote(compat.repo)}",
    ]
    uniform_interpreter = compat.uniform_interpreter
    if uniform_interpreter is not None:
        lines.append(f"{interpreter_name} = {versions_repr(uniform_interpreter)}")
    lines.append("")

    lines.append(f"\t[{name}.versions.sha1]")
    lines.extend(f"\t{_quote(number)} = {_quote(digest)}" for number, digest in compat.sha1)
    lines.append("")

    if uniform_interpreter is None:
        lines.append(f"\t[{name}.{interpreter_name}]")
        lines.extend(_table_rows(compat.interpreter))
        lines.append("")

    if include_uuids and compat.dependency_uuids:
        lines.append(f"\t[{name}.compat.uuids]")
        lines.extend(
            f"\t{dep} = {_quote(uuid)}" for dep, uuid in compat.dependency_uuids.items()
        )
        lines.append("")

    if compat.uniform:
        lines.append(f"\t[{name}.compat.versions]")
        lines.extend(
            f"\t{dep} = {versions_repr(ranges)}" for dep, ranges in compat.uniform.items()
        )
        lines.append("")

    for dep, rows in compat.nonuniform.items():
        lines.append(f"\t[{name}.compat.versions.{dep}]")
        lines.extend(_table_rows(rows))
        lines.append("")

    return "\n".join(lines) + "\n"


def render_registry(
    compats: Iterable[PackageCompat],
    *,
    interpreter_name: str = DEFAULT_INTERPRETER_NAME,
    include_uuids: bool = False,
) -> str:
    """Render every package, in the order given."""
    return "".join(
        render_package(
            compat,
            interpreter_name=interpreter_name,
            include_uuids=include_uuids,
        )
        for compat in compats
    )


def _table_rows(rows: RangeTable) -> List[str]:
    return [
        f"\t{_quote(version_range)} = {versions_repr(ranges)}"
        for version_range, ranges in rows
    ]
