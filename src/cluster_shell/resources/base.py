"""Shared pieces for resource kind definitions."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from cluster_shell.core.extractors import Extractor
from cluster_shell.core.kobj import KObj, ObjType
from cluster_shell.core.metadata import safe_get
from cluster_shell.core.sorting import SortKey
from cluster_shell.core.table import Column, SemanticColor

NONE_TEXT = "<none>"


@dataclass(frozen=True)
class ResourceDefinition:
    """Everything the shell knows about listing one resource kind."""

    kind: ObjType
    command: str
    help: str
    columns: tuple[Column, ...]
    extra_columns: tuple[Column, ...]
    extractors: Mapping[str, Extractor]
    to_kobj: Callable[[Any], KObj]
    aliases: tuple[str, ...] = ()
    pre_sorts: Mapping[str, SortKey] = field(default_factory=dict)

    def __post_init__(self) -> None:
        flags = [column.flag for column in (*self.columns, *self.extra_columns)]
        if len(flags) != len(set(flags)):
            raise ValueError(f"duplicate column flags for {self.kind}")
        if any(flag != flag.lower() for flag in flags):
            raise ValueError(f"column flags for {self.kind} must be lowercase")

    @property
    def column_flags(self) -> tuple[str, ...]:
        return tuple(column.flag for column in self.columns)

    @property
    def extra_column_flags(self) -> tuple[str, ...]:
        return tuple(column.flag for column in self.extra_columns)

    @property
    def names(self) -> tuple[str, ...]:
        return (self.command, *self.aliases)


def metadata_to_kobj(record: Any, typ: ObjType) -> KObj:
    """Identity from ``record.metadata``; a missing name becomes ``<Unknown>``."""
    return KObj(
        name=safe_get(record, "metadata", "name"),
        namespace=safe_get(record, "metadata", "namespace"),
        typ=typ,
    )


def phase_color(phase: str) -> SemanticColor:
    """Colour for a pod/namespace/volume lifecycle phase."""
    match phase:
        case "Running" | "Active" | "Bound" | "Available" | "Ready":
            return SemanticColor.SUCCESS
        case "Pending" | "ContainerCreating" | "Released":
            return SemanticColor.WARN
        case "Succeeded":
            return SemanticColor.INFO
        case _:
            return SemanticColor.DANGER
