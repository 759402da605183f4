"""
Grouping helpers used to find facts shared by many versions.

:func:`invert_map` turns ``version -> fact`` into ``fact -> [versions]``;
:func:`flatten_keys` turns a grouping back into one entry per key.
"""

from __future__ import annotations

from typing import Dict, Hashable, Iterable, List, Mapping, TypeVar

from depregistry.exceptions import ContractViolationError

K = TypeVar("K")
V = TypeVar("V", bound=Hashable)


def invert_map(forward: Mapping[K, V]) -> Dict[V, List[K]]:
    """Group the keys of ``forward`` by value.

    Each group's keys are sorted, and groups appear in the order their
    value was first seen.

    Example:
        >>> invert_map({"b": 1, "a": 1, "c": 2})
        {1: ['a', 'b'], 2: ['c']}
    """
    reverse: Dict[V, List[K]] = {}
    for key, value in forward.items():
        reverse.setdefault(value, []).append(key)
    for keys in reverse.values():
        keys.sort()
    return reverse


def invert_grouped(forward: Mapping[Iterable[K], V]) -> Dict[V, List[K]]:
    """Like :func:`invert_map` for a mapping whose keys are key groups.

    The groups of every entry sharing a value are concatenated.

    Example:
        >>> invert_grouped({("b", "a"): 1, ("c",): 2, ("d",): 1})
        {1: ['a', 'b', 'd'], 2: ['c']}
    """
    reverse: Dict[V, List[K]] = {}
    for keys, value in forward.items():
        reverse.setdefault(value, []).extend(keys)
    for keys in reverse.values():
        keys.sort()
    return reverse


def flatten_keys(grouped: Mapping[Iterable[K], V]) -> Dict[K, V]:
    """Expand ``{(k1, k2): v}`` into ``{k1: v, k2: v}``.

    Raises:
        ContractViolationError: A key appears in two groups with different
            values, so ``grouped`` is not a partition.
    """
    flat: Dict[K, V] = {}
    for keys, value in grouped.items():
        for key in keys:
            if key in flat and flat[key] != value:
                raise ContractViolationError(
                    f"Key {key!s} is grouped under two different values",
                    operation="flatten_keys",
                )
            flat[key] = value
    return flat
