"""Time helpers for stored instants.

All persisted timestamps are UTC instants serialized as ISO-8601 with a
trailing ``Z``. Conversion to a wall-clock representation uses a fixed
offset and is only needed when rendering reports.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional


def now_utc() -> datetime:
    """Current instant, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def parse_instant(value) -> Optional[datetime]:
    """
    Parse a stored timestamp into an aware UTC datetime.

    - None / "" -> None
    - "...Z" or "...+/-HH:MM" is converted to UTC
    - a naive value is interpreted as UTC
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        s = str(value).strip()
        if not s:
            return None
        # Accept trailing Z
        if s.endswith("Z") or s.endswith("z"):
            s = s[:-1] + "+00:00"
        dt = datetime.fromisoformat(s)

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serialize an instant to ISO-8601 with trailing 'Z'.

    Sub-second precision is kept so that parse_instant(to_utc_z(t)) == t.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def format_display(dt: Optional[datetime], offset_minutes: int) -> str:
    """Render an instant as 'YYYY-MM-DD HH:MM' in a fixed UTC offset."""
    if dt is None:
        return ""
    instant = parse_instant(dt)
    local = instant.astimezone(timezone(timedelta(minutes=offset_minutes)))
    return local.strftime("%Y-%m-%d %H:%M")


def local_to_instant(value: Optional[str], offset_minutes: int) -> Optional[datetime]:
    """Interpret a 'YYYY-MM-DDTHH:MM' wall-clock value in a fixed offset as a UTC instant."""
    if not value or not value.strip():
        return None
    local = datetime.fromisoformat(value.strip())
    if local.tzinfo is None:
        local = local.replace(tzinfo=timezone(timedelta(minutes=offset_minutes)))
    return local.astimezone(timezone.utc)
