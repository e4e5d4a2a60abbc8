"""Datetime helpers: zone-aware stamps and their text form."""

from __future__ import annotations

from datetime import datetime, timezone

import pendulum


def now_in(tz_name: str) -> datetime:
    """Return the current time as a fixed-offset datetime in the named zone.

    The offset is frozen at the moment of the call so the stored value keeps
    the wall-clock date it was taken on, even across a DST change.
    """
    current = pendulum.now(tz_name)
    offset = current.utcoffset()
    tz = timezone(offset) if offset is not None else timezone.utc
    return datetime.fromtimestamp(current.timestamp(), tz=tz)


def format_iso(dt: datetime) -> str:
    """Format datetime as ISO 8601, keeping its offset."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def parse_iso(value: str) -> datetime:
    """Parse a stored stamp back into an aware datetime.

    Reads what ``format_iso`` writes and lax variants of it (space separator,
    short offsets, date only). Missing zone is read as UTC.
    """
    parsed = pendulum.parse(value.strip(), tz="UTC", strict=False)
    if not isinstance(parsed, pendulum.DateTime):
        # pendulum.parse returns Date for date-only strings
        parsed = pendulum.datetime(
            parsed.year, parsed.month, parsed.day, tz="UTC"  # type: ignore[union-attr]
        )
    return parsed
