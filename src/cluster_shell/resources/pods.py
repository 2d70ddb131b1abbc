"""Pods: columns, extractors and identity mapping."""

from __future__ import annotations

from typing import Any

from cluster_shell.core.extractors import Extractor
from cluster_shell.core.kobj import KObj, ObjType
from cluster_shell.core.metadata import format_timestamp, parse_timestamp, safe_get
from cluster_shell.core.table import Cell, columns
from cluster_shell.resources.base import NONE_TEXT, ResourceDefinition, phase_color

COLUMNS = columns(
    ("name", "Name"),
    ("ready", "Ready"),
    ("status", "Status"),
    ("restarts", "Restarts"),
    ("age", "Age"),
)

EXTRA_COLUMNS = columns(
    ("ip", "IP"),
    ("labels", "Labels"),
    ("lastrestart", "Last Restart"),
    ("namespace", "Namespace"),
    ("node", "Node"),
    ("nominatednode", "Nominated Node"),
    ("readinessgates", "Readiness Gates"),
)


def pod_to_kobj(pod: Any) -> KObj:
    containers = safe_get(pod, "spec", "containers", default=[])
    return KObj(
        name=safe_get(pod, "metadata", "name"),
        namespace=safe_get(pod, "metadata", "namespace"),
        typ=ObjType.POD,
        containers=tuple(container.name for container in containers),
    )


def _container_statuses(pod: Any) -> list[Any] | None:
    return safe_get(pod, "status", "container_statuses")


def has_waiting(pod: Any) -> bool:
    """True if any container is waiting, or has no running/terminated state."""
    for status in _container_statuses(pod) or []:
        state = status.state
        if state is None:
            continue
        if state.waiting is not None or (state.running is None and state.terminated is None):
            return True
    return False


def pod_status(pod: Any) -> Cell:
    if safe_get(pod, "metadata", "deletion_timestamp") is not None:
        status = "Terminating"
    elif has_waiting(pod):
        status = "ContainerCreating"
    else:
        status = safe_get(pod, "status", "phase", default="Unknown")
    return Cell.styled(status, phase_color(status))


def ready_counts(pod: Any) -> Cell | None:
    """``ready/total`` containers."""
    if safe_get(pod, "status") is None:
        return None
    statuses = _container_statuses(pod) or []
    ready = sum(1 for status in statuses if status.ready)
    return Cell.plain(f"{ready}/{len(statuses)}")


def total_restarts(pod: Any) -> int:
    return sum(status.restart_count or 0 for status in _container_statuses(pod) or [])


def restart_count(pod: Any) -> Cell | None:
    if _container_statuses(pod) is None:
        return None
    return Cell.plain(total_restarts(pod))


def restarts_sort_key(pod: Any) -> int:
    return total_restarts(pod)


def last_restart(pod: Any) -> Cell | None:
    """Most recent time any container's previous instance terminated."""
    finished = [
        parse_timestamp(safe_get(status, "last_state", "terminated", "finished_at"))
        for status in _container_statuses(pod) or []
    ]
    times = [when for when in finished if when is not None]
    if not times:
        return None
    return Cell.plain(format_timestamp(max(times)))


def pod_ip(pod: Any) -> Cell | None:
    ip = safe_get(pod, "status", "pod_ip")
    return Cell.plain(ip) if ip else None


def pod_node(pod: Any) -> Cell | None:
    node = safe_get(pod, "spec", "node_name")
    return Cell.plain(node) if node else None


def pod_nominated_node(pod: Any) -> Cell | None:
    status = safe_get(pod, "status")
    if status is None:
        return None
    return Cell.plain(getattr(status, "nominated_node_name", None) or NONE_TEXT)


def pod_readiness_gates(pod: Any) -> Cell | None:
    gates = safe_get(pod, "spec", "readiness_gates")
    if gates is None:
        return None
    if not gates:
        return Cell.plain(NONE_TEXT)
    return Cell.plain(", ".join(gate.condition_type for gate in gates))


EXTRACTORS: dict[str, Extractor] = {
    "IP": pod_ip,
    "Last Restart": last_restart,
    "Node": pod_node,
    "Nominated Node": pod_nominated_node,
    "Readiness Gates": pod_readiness_gates,
    "Ready": ready_counts,
    "Restarts": restart_count,
    "Status": pod_status,
}

DEFINITION = ResourceDefinition(
    kind=ObjType.POD,
    command="pods",
    help="Get pods (in current namespace if set)",
    columns=COLUMNS,
    extra_columns=EXTRA_COLUMNS,
    extractors=EXTRACTORS,
    to_kobj=pod_to_kobj,
    pre_sorts={"restarts": restarts_sort_key},
)
