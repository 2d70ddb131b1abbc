"""Per-kind registry of column extractors.

An extractor turns one raw record into the cell for one column, or None when
the record has nothing to show there. The registry is built once at startup
and is read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from cluster_shell.core.kobj import ObjType
from cluster_shell.core.table import Cell

Extractor = Callable[[Any], Cell | None]


class ExtractorRegistry:
    """Immutable mapping of (kind, column display name) to extractor."""

    def __init__(self, tables: Mapping[ObjType, Mapping[str, Extractor]] | None = None) -> None:
        self._tables: dict[ObjType, Mapping[str, Extractor]] = {
            kind: MappingProxyType(dict(table)) for kind, table in (tables or {}).items()
        }

    def lookup(self, kind: ObjType, display_name: str) -> Extractor | None:
        """Extractor for a column of ``kind``, or None if none is registered."""
        table = self._tables.get(kind)
        if table is None:
            return None
        return table.get(display_name)

    def columns(self, kind: ObjType) -> frozenset[str]:
        """Display names with a registered extractor for ``kind``."""
        return frozenset(self._tables.get(kind, {}))
