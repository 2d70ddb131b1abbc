"""Helpers for reading kubernetes SDK objects without tripping on gaps."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def safe_get(obj: Any, *attrs: str, default: Any = None) -> Any:
    """Safely traverse nested attributes on kubernetes SDK objects."""
    current = obj
    for attr in attrs:
        if current is None:
            return default
        current = getattr(current, attr, None)
    return current if current is not None else default


def parse_timestamp(value: Any) -> datetime | None:
    """Coerce a datetime or ISO string to an aware datetime (UTC if naive)."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def creation_time(obj: Any) -> datetime | None:
    return parse_timestamp(safe_get(obj, "metadata", "creation_timestamp"))


def format_age(created: datetime, now: datetime | None = None) -> str:
    """Render the time since ``created`` as e.g. ``3d``, ``5h``, ``12m``, ``40s``."""
    now = now or datetime.now(UTC)
    seconds = max(int((now - created).total_seconds()), 0)
    days, remainder = divmod(seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)
    if days > 0:
        return f"{days}d"
    if hours > 0:
        return f"{hours}h"
    if minutes > 0:
        return f"{minutes}m"
    return f"{seconds}s"


def format_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


def labels_text(obj: Any) -> str | None:
    """Labels as ``k=v, k2=v2`` in key order, None when there are none."""
    labels = safe_get(obj, "metadata", "labels")
    if not labels:
        return None
    return ", ".join(f"{key}={value}" for key, value in sorted(dict(labels).items()))
