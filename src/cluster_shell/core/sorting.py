"""Sort resolution for list commands.

A sort column resolves to one of two strategies:

* :class:`PreSort` orders the raw records by a typed key before any cell is
  rendered. Age is the canonical case: ``"9m"`` and ``"10m"`` sort wrongly as
  text, so age sorts on the creation timestamp.
* :class:`PostSort` orders rows by the rendered text of a named column.

Python sorts are stable, so equal keys keep fetch order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from cluster_shell.core.errors import ConfigError
from cluster_shell.core.kobj import ObjType
from cluster_shell.core.metadata import creation_time
from cluster_shell.core.table import Column

SortKey = Callable[[Any], Any]


def age_sort_key(record: Any) -> tuple[int, float]:
    """Youngest first; records without a creation timestamp sort last."""
    created = creation_time(record)
    if created is None:
        return (1, 0.0)
    return (0, -created.timestamp())


# Sorts whose meaning is the same for every kind
WELL_KNOWN_PRE_SORTS: Mapping[str, SortKey] = {
    "age": age_sort_key,
}


@dataclass(frozen=True)
class PreSort:
    """Sort raw records by ``key`` before projection."""

    column: Column
    key: SortKey


@dataclass(frozen=True)
class PostSort:
    """Sort rows by the rendered text of ``column``."""

    column: Column

    @property
    def display_name(self) -> str:
        return self.column.display_name


SortFunc = PreSort | PostSort


def unknown_column(name: str, kind: ObjType | str) -> ConfigError:
    return ConfigError(f"unknown column '{name}' for resource kind '{kind}'")


def resolve(
    column_name: str,
    base_columns: Iterable[Column],
    extra_columns: Iterable[Column] = (),
    *,
    kind: ObjType | str = "",
    pre_sorts: Mapping[str, SortKey] | None = None,
) -> SortFunc:
    """Pick the sort strategy for ``column_name``.

    Args:
        column_name: Column flag (case-insensitive) to sort by.
        base_columns: Always-visible columns of the kind.
        extra_columns: Optional columns of the kind.
        kind: Resource kind, used in error messages.
        pre_sorts: Kind-specific typed sorts keyed by column flag.

    Raises:
        ConfigError: If no base or extra column has that flag.
    """
    flag = column_name.strip().lower()
    column = next(
        (col for col in (*base_columns, *extra_columns) if col.flag == flag),
        None,
    )
    if column is None:
        raise unknown_column(column_name, kind)

    if key := WELL_KNOWN_PRE_SORTS.get(flag):
        return PreSort(column, key)
    if pre_sorts and (key := pre_sorts.get(flag)):
        return PreSort(column, key)
    return PostSort(column)
