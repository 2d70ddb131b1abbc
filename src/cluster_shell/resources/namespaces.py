"""Namespaces: columns, extractors and identity mapping."""

from __future__ import annotations

from typing import Any

from cluster_shell.core.extractors import Extractor
from cluster_shell.core.kobj import KObj, ObjType
from cluster_shell.core.metadata import safe_get
from cluster_shell.core.table import Cell, columns
from cluster_shell.resources.base import ResourceDefinition, metadata_to_kobj, phase_color

COLUMNS = columns(
    ("name", "Name"),
    ("status", "Status"),
    ("age", "Age"),
)

EXTRA_COLUMNS = columns(("labels", "Labels"))


def namespace_to_kobj(namespace: Any) -> KObj:
    return metadata_to_kobj(namespace, ObjType.NAMESPACE)


def namespace_status(namespace: Any) -> Cell | None:
    phase = safe_get(namespace, "status", "phase")
    return Cell.styled(phase, phase_color(phase)) if phase else None


EXTRACTORS: dict[str, Extractor] = {"Status": namespace_status}

DEFINITION = ResourceDefinition(
    kind=ObjType.NAMESPACE,
    command="namespaces",
    help="Get namespaces in current context",
    columns=COLUMNS,
    extra_columns=EXTRA_COLUMNS,
    extractors=EXTRACTORS,
    to_kobj=namespace_to_kobj,
    aliases=("ns",),
)
