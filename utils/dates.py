"""
utils/dates.py
--------------
Normalizes caller-supplied timestamps before they are written.

Columns are plain TIMESTAMP (no zone). Values that carry an offset are
converted to UTC and stripped of their tzinfo so the stored date, and the
``YYYYMMDD`` string read back, is the UTC date.
"""

from datetime import datetime, timezone
from typing import Any, Iterable

from dateutil.parser import isoparse


def to_utc_naive(value: Any) -> Any:
    """
    Convert an ISO-8601 string or datetime to a naive UTC datetime.

    Dates, naive datetimes, None and anything that is not a string or
    datetime are returned unchanged.

    Raises:
        ValueError: If a string is not ISO-8601.
    """
    if isinstance(value, str):
        value = isoparse(value)
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def normalize_dates(data: dict, keys: Iterable[str]) -> dict:
    """Return a copy of `data` with the given timestamp keys normalized."""
    out = dict(data)
    for key in keys:
        if out.get(key) is not None:
            out[key] = to_utc_naive(out[key])
    return out
