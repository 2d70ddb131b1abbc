"""Deployments: columns, extractors and identity mapping."""

from __future__ import annotations

from typing import Any

from cluster_shell.core.extractors import Extractor
from cluster_shell.core.kobj import KObj, ObjType
from cluster_shell.core.metadata import safe_get
from cluster_shell.core.table import Cell, SemanticColor, columns
from cluster_shell.resources.base import ResourceDefinition, metadata_to_kobj

COLUMNS = columns(
    ("name", "Name"),
    ("ready", "Ready"),
    ("uptodate", "Up To Date"),
    ("available", "Available"),
    ("age", "Age"),
)

EXTRA_COLUMNS = columns(
    ("namespace", "Namespace"),
    ("labels", "Labels"),
    ("strategy", "Strategy"),
    ("images", "Images"),
)


def deployment_to_kobj(deployment: Any) -> KObj:
    return metadata_to_kobj(deployment, ObjType.DEPLOYMENT)


def deployment_ready(deployment: Any) -> Cell:
    desired = safe_get(deployment, "spec", "replicas", default=0)
    ready = safe_get(deployment, "status", "ready_replicas", default=0)
    color = SemanticColor.SUCCESS if ready >= desired else SemanticColor.WARN
    return Cell.styled(f"{ready}/{desired}", color)


def deployment_up_to_date(deployment: Any) -> Cell:
    return Cell.plain(safe_get(deployment, "status", "updated_replicas", default=0))


def deployment_available(deployment: Any) -> Cell:
    return Cell.plain(safe_get(deployment, "status", "available_replicas", default=0))


def deployment_strategy(deployment: Any) -> Cell | None:
    strategy = safe_get(deployment, "spec", "strategy", "type")
    return Cell.plain(strategy) if strategy else None


def deployment_images(deployment: Any) -> Cell | None:
    containers = safe_get(deployment, "spec", "template", "spec", "containers") or []
    images = [container.image for container in containers if container.image]
    return Cell.plain(", ".join(images)) if images else None


EXTRACTORS: dict[str, Extractor] = {
    "Ready": deployment_ready,
    "Up To Date": deployment_up_to_date,
    "Available": deployment_available,
    "Strategy": deployment_strategy,
    "Images": deployment_images,
}

DEFINITION = ResourceDefinition(
    kind=ObjType.DEPLOYMENT,
    command="deployments",
    help="Get deployments (in current namespace if set)",
    columns=COLUMNS,
    extra_columns=EXTRA_COLUMNS,
    extractors=EXTRACTORS,
    to_kobj=deployment_to_kobj,
    aliases=("deps",),
)
