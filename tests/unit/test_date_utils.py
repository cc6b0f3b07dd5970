"""Unit tests for date helpers"""

import pytest
from datetime import date, datetime, timedelta, timezone

from payment_scheduler.utils.date_utils import (
    align_timezone,
    ceil_days_between,
    days_until,
    parse_iso_datetime,
    to_datetime,
)

TAIPEI = timezone(timedelta(hours=8))


def test_to_datetime_promotes_dates_to_midnight():
    assert to_datetime(date(2025, 3, 10)) == datetime(2025, 3, 10)
    assert to_datetime(datetime(2025, 3, 10, 8)) == datetime(2025, 3, 10, 8)


@pytest.mark.parametrize("value", [None, "", "soon", "2025-02-30"])
def test_parse_iso_datetime_rejects_unusable_values(value):
    assert parse_iso_datetime(value) is None


def test_align_timezone_keeps_matching_values():
    naive = datetime(2025, 3, 10, 6)
    aware = datetime(2025, 3, 10, 6, tzinfo=TAIPEI)

    assert align_timezone(naive, datetime(2025, 3, 1)) is naive
    assert align_timezone(aware, datetime(2025, 3, 1, tzinfo=timezone.utc)) is aware


def test_align_timezone_converts_aware_value_to_utc_for_naive_reference():
    aligned = align_timezone(datetime(2025, 3, 10, 6, tzinfo=TAIPEI), datetime(2025, 3, 10))

    assert aligned == datetime(2025, 3, 9, 22)
    assert aligned.tzinfo is None


def test_align_timezone_reads_naive_value_as_utc_for_aware_reference():
    aligned = align_timezone(datetime(2025, 3, 10, 6), datetime(2025, 3, 10, tzinfo=TAIPEI))

    assert aligned == datetime(2025, 3, 10, 6, tzinfo=timezone.utc)


def test_ceil_days_between_rounds_partial_days_up():
    start = datetime(2025, 3, 10)

    assert ceil_days_between(start, datetime(2025, 3, 12, 18)) == 3
    assert ceil_days_between(start, datetime(2025, 3, 13)) == 3
    assert ceil_days_between(start, datetime(2025, 3, 9, 12)) == 0


def test_days_until_converts_offset_due_date():
    # 02:00 at +08:00 on the 13th is 18:00 UTC on the 12th
    assert days_until("2025-03-13T02:00:00+08:00", datetime(2025, 3, 10)) == 3
    assert days_until(None, datetime(2025, 3, 10)) is None
