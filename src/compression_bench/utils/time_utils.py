"""Time utility helpers for UTC-safe timestamps."""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)


def utc_iso_string(value: datetime | None = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and a `Z` suffix."""

    moment = (value or now_utc()).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
