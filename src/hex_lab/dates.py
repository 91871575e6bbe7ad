"""UTC calendar helpers shared by the stakes filters and the flush day buckets."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pandas as pd


def day_start(day: date | str) -> int:
    """Unix seconds at 00:00 UTC of ``day`` (a ``date`` or ``YYYY-MM-DD`` string)."""

    if isinstance(day, str):
        day = date.fromisoformat(day)
    return int(datetime(day.year, day.month, day.day, tzinfo=UTC).timestamp())


def parse_timestamp(value: str) -> pd.Timestamp | None:
    """Parse a CSV timestamp as UTC; ``None`` when it cannot be read."""

    text = value.strip()
    if not text:
        return None
    try:
        ts = pd.Timestamp(text)
    except (ValueError, TypeError):
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def date_key(ts: pd.Timestamp) -> str:
    """ISO date portion of a UTC timestamp, used as the day-bucket key."""

    return ts.strftime("%Y-%m-%d")


__all__ = ["day_start", "parse_timestamp", "date_key"]
