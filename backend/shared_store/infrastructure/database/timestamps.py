"""Timestamp normalisation for values read back from the database."""

from datetime import datetime, timezone


def as_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` as a UTC-aware datetime.

    SQLite has no timezone storage and hands back naive values that were
    written as UTC; PostgreSQL returns aware ones, converted here to UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
