"""Nodes: columns, extractors and identity mapping."""

from __future__ import annotations

from typing import Any

from cluster_shell.core.extractors import Extractor
from cluster_shell.core.kobj import KObj, ObjType
from cluster_shell.core.metadata import safe_get
from cluster_shell.core.table import Cell, SemanticColor, columns
from cluster_shell.resources.base import NONE_TEXT, ResourceDefinition, metadata_to_kobj

COLUMNS = columns(
    ("name", "Name"),
    ("status", "Status"),
    ("roles", "Roles"),
    ("age", "Age"),
    ("version", "Version"),
)

EXTRA_COLUMNS = columns(
    ("labels", "Labels"),
    ("internalip", "Internal IP"),
    ("osimage", "OS Image"),
    ("kernel", "Kernel"),
    ("runtime", "Container Runtime"),
)

ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"


def node_to_kobj(node: Any) -> KObj:
    return metadata_to_kobj(node, ObjType.NODE)


def node_status(node: Any) -> Cell:
    conditions = safe_get(node, "status", "conditions") or []
    ready = next((cond.status for cond in conditions if cond.type == "Ready"), None)
    if ready == "True":
        text, color = "Ready", SemanticColor.SUCCESS
    elif ready == "False":
        text, color = "NotReady", SemanticColor.DANGER
    else:
        text, color = "Unknown", SemanticColor.DANGER
    if safe_get(node, "spec", "unschedulable"):
        text += ",SchedulingDisabled"
        if color is SemanticColor.SUCCESS:
            color = SemanticColor.WARN
    return Cell.styled(text, color)


def node_roles(node: Any) -> Cell:
    labels = safe_get(node, "metadata", "labels") or {}
    roles = sorted(
        key.removeprefix(ROLE_LABEL_PREFIX)
        for key in labels
        if key.startswith(ROLE_LABEL_PREFIX) and key != ROLE_LABEL_PREFIX
    )
    return Cell.plain(",".join(roles) if roles else NONE_TEXT)


def _node_info(node: Any, attr: str) -> Cell | None:
    value = safe_get(node, "status", "node_info", attr)
    return Cell.plain(value) if value else None


def node_version(node: Any) -> Cell | None:
    return _node_info(node, "kubelet_version")


def node_os_image(node: Any) -> Cell | None:
    return _node_info(node, "os_image")


def node_kernel(node: Any) -> Cell | None:
    return _node_info(node, "kernel_version")


def node_runtime(node: Any) -> Cell | None:
    return _node_info(node, "container_runtime_version")


def node_internal_ip(node: Any) -> Cell | None:
    addresses = safe_get(node, "status", "addresses") or []
    ips = [address.address for address in addresses if address.type == "InternalIP"]
    return Cell.plain(", ".join(ips)) if ips else None


EXTRACTORS: dict[str, Extractor] = {
    "Status": node_status,
    "Roles": node_roles,
    "Version": node_version,
    "Internal IP": node_internal_ip,
    "OS Image": node_os_image,
    "Kernel": node_kernel,
    "Container Runtime": node_runtime,
}

DEFINITION = ResourceDefinition(
    kind=ObjType.NODE,
    command="nodes",
    help="Get nodes in current context",
    columns=COLUMNS,
    extra_columns=EXTRA_COLUMNS,
    extractors=EXTRACTORS,
    to_kobj=node_to_kobj,
)
