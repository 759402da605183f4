"""Parser for line-oriented ``requires`` files.

Each non-blank, non-comment line declares one dependency::

    # comments run to the end of the line
    julia 0.4
    Compat 0.7.15
    @osx Homebrew
    @!windows BinDeps 0.3- 0.5

Fields are whitespace separated:

- zero or more platform tags, each starting with ``@`` (stored without it),
- the dependency name,
- zero, one or two version bounds. No bound admits every version, one
  bound ``a`` means ``[a, ∞)`` and two bounds ``a b`` mean ``[a, b)``.

Several lines may name the same dependency; :func:`combine_requires`
intersects their intervals and unions their platform tags.

Typical usage::

    requires = load_requires(version_dir / "requires")
    julia = requires.pop("julia", None)
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Union

from packaging.version import InvalidVersion

from depregistry.exceptions import ParseError
from depregistry.models import Require, VersionInterval
from depregistry.utils import get_logger, read_text_if_exists
from depregistry.utils.version_utils import parse_version_bound
from depregistry.constants import COMMENT_MARKER, PLATFORM_TAG_PREFIX

logger = get_logger("reqs_parser")

#: A requirement line may carry at most one interval.
_MAX_BOUNDS = 2


@dataclass(frozen=True)
class RequirementLine:
    """One parsed dependency declaration.

    Attributes:
        package: Dependency name.
        versions: Interval the dependency's version must fall in.
        systems: Platform tags without the leading ``@``.
        line_number: 1-based source line, if known.
    """

    package: str
    versions: VersionInterval
    systems: FrozenSet[str] = frozenset()
    line_number: Optional[int] = None

    def to_require(self) -> Require:
        return Require(versions=self.versions, systems=self.systems)


def parse_line(
    line: str,
    line_number: Optional[int] = None,
    source_file_path: Optional[str] = None,
) -> Optional[RequirementLine]:
    """Parse a single line, returning ``None`` for blanks and comments.

    Raises:
        ParseError: The line has no package name, an invalid or unsorted
            version bound, or more than one interval.
    """
    content = line.split(COMMENT_MARKER, 1)[0]
    fields = content.split()
    if not fields:
        return None

    def fail(message: str) -> ParseError:
        return ParseError(
            message,
            line_number=line_number,
            line_content=line.rstrip("\r\n"),
            file_path=source_file_path,
        )

    systems: List[str] = []
    while fields and fields[0].startswith(PLATFORM_TAG_PREFIX):
        systems.append(fields.pop(0)[len(PLATFORM_TAG_PREFIX):])

    if not fields:
        raise fail("Requirement has platform tags but no package name")

    package, bounds = fields[0], fields[1:]

    if len(bounds) > _MAX_BOUNDS:
        raise fail(f"Requirement for {package} declares more than one version interval")

    try:
        parsed = [parse_version_bound(bound) for bound in bounds]
    except InvalidVersion as exc:
        raise fail(f"Invalid version bound for {package}: {exc}") from exc

    if parsed != sorted(parsed):
        raise fail(f"Version bounds for {package} are not in ascending order")

    if not parsed:
        interval = VersionInterval()
    elif len(parsed) == 1:
        interval = VersionInterval(parsed[0])
    else:
        interval = VersionInterval(parsed[0], parsed[1])

    return RequirementLine(
        package=package,
        versions=interval,
        systems=frozenset(systems),
        line_number=line_number,
    )


def parse_requires(
    content: str,
    source_file_path: Optional[str] = None,
) -> List[RequirementLine]:
    """Parse the full text of a ``requires`` file."""
    lines: List[RequirementLine] = []
    for line_number, line in enumerate(content.splitlines(), start=1):
        parsed = parse_line(line, line_number, source_file_path)
        if parsed is not None:
            lines.append(parsed)
    return lines


def combine_requires(lines: Iterable[RequirementLine]) -> Dict[str, Require]:
    """Merge requirement lines into one :class:`Require` per dependency."""
    requires: Dict[str, Require] = {}
    for line in lines:
        require = line.to_require()
        if line.package in requires:
            require = requires[line.package].combine(require)
            logger.debug("Combined repeated requirement on %s", line.package)
        requires[line.package] = require
    return requires


def load_requires(path: Union[str, Path]) -> Dict[str, Require]:
    """Read and combine a ``requires`` file; a missing file means no requirements."""
    content = read_text_if_exists(path)
    if content is None:
        return {}
    return combine_requires(parse_requires(content, source_file_path=str(path)))
