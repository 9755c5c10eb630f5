"""Utility helpers for rendering visit timestamps."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional


_LOCAL_TZ = datetime.now().astimezone().tzinfo or timezone.utc


def _coerce_datetime(value: Any) -> Optional[datetime]:
    """Best-effort conversion to an aware ``datetime`` in the local timezone."""

    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        dt = datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_LOCAL_TZ)
    return dt.astimezone(_LOCAL_TZ)


def now_local() -> datetime:
    return datetime.now(tz=_LOCAL_TZ)


def to_iso(value: datetime) -> str:
    """Serialise ``value`` as an ISO-8601 string in UTC (``...Z`` suffix)."""

    dt = _coerce_datetime(value)
    if dt is None:
        raise ValueError(f"Not a timestamp: {value!r}")
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_local_date(value: Any, default: str = "") -> str:
    """Format ``value`` as ``dd/mm/yyyy`` in local time."""

    dt = _coerce_datetime(value)
    if dt is None:
        return default
    return dt.strftime("%d/%m/%Y")


def format_local_datetime(value: Any, default: str = "") -> str:
    """Format ``value`` as ``dd/mm/yyyy, HH:MM:SS`` in local time."""

    dt = _coerce_datetime(value)
    if dt is None:
        return default
    return dt.strftime("%d/%m/%Y, %H:%M:%S")


def epoch_millis(value: Any) -> int:
    dt = _coerce_datetime(value)
    if dt is None:
        raise ValueError(f"Not a timestamp: {value!r}")
    return int(dt.timestamp() * 1000)


def to_datetime(value: Any) -> Optional[datetime]:
    """Public wrapper exposing the internal conversion helper."""

    return _coerce_datetime(value)


__all__ = [
    "now_local",
    "to_iso",
    "format_local_date",
    "format_local_datetime",
    "epoch_millis",
    "to_datetime",
]
