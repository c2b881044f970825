from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (how timestamps are stored in SQLite)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def fmt_dt_iso(dt: datetime | None) -> str | None:
    """ISO-8601 text for export.

    Naive timestamps are treated as UTC and get an explicit `+00:00` offset.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()
