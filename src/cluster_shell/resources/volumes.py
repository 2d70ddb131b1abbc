"""Persistent volumes: columns, extractors and identity mapping."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from kubernetes.utils import parse_quantity

from cluster_shell.core.extractors import Extractor
from cluster_shell.core.kobj import KObj, ObjType
from cluster_shell.core.metadata import safe_get
from cluster_shell.core.table import Cell, columns
from cluster_shell.resources.base import ResourceDefinition, metadata_to_kobj, phase_color

COLUMNS = columns(
    ("name", "Name"),
    ("age", "Age"),
    ("capacity", "Capacity"),
    ("accessmodes", "Access Modes"),
    ("reclaimpolicy", "Reclaim Policy"),
    ("status", "Status"),
    ("claim", "Claim"),
    ("storageclass", "Storage Class"),
    ("reason", "Reason"),
)

EXTRA_COLUMNS = columns(
    ("labels", "Labels"),
    ("volumemode", "Volume Mode"),
)

ACCESS_MODE_ABBREVIATIONS = {
    "ReadWriteOnce": "RWO",
    "ReadOnlyMany": "ROX",
    "ReadWriteMany": "RWX",
    "ReadWriteOncePod": "RWOP",
}


def pv_to_kobj(volume: Any) -> KObj:
    return metadata_to_kobj(volume, ObjType.PERSISTENT_VOLUME)


def _storage(volume: Any) -> str | None:
    capacity = safe_get(volume, "spec", "capacity") or {}
    storage = capacity.get("storage")
    return str(storage) if storage else None


def volume_capacity(volume: Any) -> Cell | None:
    storage = _storage(volume)
    return Cell.plain(storage) if storage else None


def capacity_sort_key(volume: Any) -> tuple[int, Decimal]:
    """Smallest first by parsed quantity; unset or unparsable last."""
    storage = _storage(volume)
    if storage is None:
        return (1, Decimal(0))
    try:
        return (0, parse_quantity(storage))
    except ValueError:
        return (1, Decimal(0))


def volume_access_modes(volume: Any) -> Cell | None:
    spec = safe_get(volume, "spec")
    if spec is None:
        return None
    modes = spec.access_modes or []
    return Cell.plain(", ".join(ACCESS_MODE_ABBREVIATIONS.get(mode, "Unknown") for mode in modes))


def volume_reclaim_policy(volume: Any) -> Cell | None:
    policy = safe_get(volume, "spec", "persistent_volume_reclaim_policy")
    return Cell.plain(policy) if policy else None


def volume_mode(volume: Any) -> Cell | None:
    mode = safe_get(volume, "spec", "volume_mode")
    return Cell.plain(mode) if mode else None


def volume_status(volume: Any) -> Cell | None:
    phase = safe_get(volume, "status", "phase")
    return Cell.styled(phase, phase_color(phase)) if phase else None


def volume_claim(volume: Any) -> Cell | None:
    claim = safe_get(volume, "spec", "claim_ref")
    if claim is None:
        return None
    namespace = getattr(claim, "namespace", None) or ""
    name = getattr(claim, "name", None) or ""
    return Cell.plain(f"{namespace}/{name}" if namespace else name)


def volume_storage_class(volume: Any) -> Cell | None:
    storage_class = safe_get(volume, "spec", "storage_class_name")
    return Cell.plain(storage_class) if storage_class else None


def volume_reason(volume: Any) -> Cell | None:
    reason = safe_get(volume, "status", "reason")
    return Cell.plain(reason) if reason else None


EXTRACTORS: dict[str, Extractor] = {
    "Capacity": volume_capacity,
    "Access Modes": volume_access_modes,
    "Reclaim Policy": volume_reclaim_policy,
    "Status": volume_status,
    "Claim": volume_claim,
    "Storage Class": volume_storage_class,
    "Reason": volume_reason,
    "Volume Mode": volume_mode,
}

DEFINITION = ResourceDefinition(
    kind=ObjType.PERSISTENT_VOLUME,
    command="persistentvolumes",
    help="Get persistent volumes in current context",
    columns=COLUMNS,
    extra_columns=EXTRA_COLUMNS,
    extractors=EXTRACTORS,
    to_kobj=pv_to_kobj,
    aliases=("pvs",),
    pre_sorts={"capacity": capacity_sort_key},
)
