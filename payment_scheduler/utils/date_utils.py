"""Date manipulation utilities"""

import math
from datetime import date, datetime, timezone
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


def to_datetime(value: date | datetime) -> datetime:
    """Promote a date to a datetime at midnight; datetimes pass through"""
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO date or datetime string; None for missing or malformed values"""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def align_timezone(value: datetime, reference: datetime) -> datetime:
    """
    Make `value` comparable with `reference`.

    A naive datetime compared with an aware one is read as UTC:
    - naive value, aware reference: value is tagged as UTC
    - aware value, naive reference: value is converted to UTC, then made naive
    Values that already match the reference's awareness are returned unchanged.
    """
    value_aware = value.tzinfo is not None
    reference_aware = reference.tzinfo is not None
    if value_aware == reference_aware:
        return value
    if reference_aware:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def ceil_days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, rounding partial days up"""
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def days_until(due_date: Optional[str], as_of: date | datetime) -> Optional[int]:
    """Days from as_of until an ISO due date, or None if there is no usable date"""
    reference = to_datetime(as_of)
    due = parse_iso_datetime(due_date)
    if due is None:
        return None
    return ceil_days_between(reference, align_timezone(due, reference))
