"""Time helpers."""

from __future__ import annotations

import datetime as dt


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def to_iso(value: dt.datetime) -> str:
    return _as_utc(value).isoformat()


def parse_timestamp(value: object) -> dt.datetime:
    """Parse an ISO-8601 string or Unix epoch seconds into an aware UTC datetime.

    Naive ISO values are taken as UTC.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, int | float):
        return dt.datetime.fromtimestamp(value, dt.UTC)
    if isinstance(value, str):
        try:
            parsed = dt.datetime.fromisoformat(value)
        except ValueError as exc:
            raise ValueError(f"Invalid timestamp: {value!r}") from exc
        return _as_utc(parsed)
    raise ValueError(f"Invalid timestamp: {value!r}")


def short_format(value: dt.datetime) -> str:
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def _as_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.UTC)
    return value.astimezone(dt.UTC)
