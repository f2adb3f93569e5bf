"""
utils/dates.py
--------------
Date coercion helpers shared by models, stores and aggregators.

Persisted dates are ISO-8601 strings. Values read back are always naive
local datetimes so that comparisons never mix aware and naive objects.
"""

from datetime import date, datetime, time
from typing import Union

from dateutil import parser as date_parser

DateLike = Union[datetime, date, str]


def to_datetime(value: DateLike) -> datetime:
    """
    Coerce a date, datetime or ISO string to a naive local datetime.

    Plain dates become midnight of that day. Timezone-aware values
    (e.g. ``2024-03-10T12:00:00Z``) are converted to local time.

    Raises:
        TypeError: If the value is not date-like.
        ValueError: If a string is not valid ISO-8601.
    """
    if isinstance(value, str):
        value = date_parser.isoparse(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Expected a date, datetime or ISO string, got {type(value).__name__}")


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO string to a calendar date."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return to_datetime(value).date()


def start_of_day(value: DateLike) -> datetime:
    return datetime.combine(to_date(value), time.min)


def end_of_day(value: DateLike) -> datetime:
    return datetime.combine(to_date(value), time.max)
