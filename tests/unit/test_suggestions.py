"""Unit tests for date-keyed suggestions and overdue reschedule proposals"""

import pytest

from payment_scheduler.config import settings
from payment_scheduler.domain.suggestions import (
    build_schedule_suggestions,
    plan_overdue_reschedule,
    summarize_daily_totals,
)


def test_suggestions_group_by_due_date(make_item, as_of):
    items = [
        make_item(id=1, due_date="2025-03-20", remaining_amount=100),
        make_item(id=2, due_date="2025-03-12", remaining_amount=200, payment_type="monthly"),
        make_item(id=3, due_date="2025-03-12T15:00:00", remaining_amount=300, has_late_fee=True),
        make_item(id=4, remaining_amount=999),
    ]
    suggestions = build_schedule_suggestions(items, as_of)

    assert [s.date for s in suggestions] == ["2025-03-12", "2025-03-20"]
    assert [item.id for item in suggestions[0].items] == [3, 2]
    assert suggestions[0].daily_total == 500
    assert suggestions[1].daily_total == 100


def test_suggestions_for_undated_items_are_empty(make_item, as_of):
    assert build_schedule_suggestions([make_item(), make_item(id=2, due_date="bad")], as_of) == []


def test_summarize_daily_totals(make_item, as_of):
    items = [
        make_item(id=1, due_date="2025-03-12", remaining_amount=200),
        make_item(id=2, due_date="2025-03-12", remaining_amount=300),
        make_item(id=3, due_date="2025-03-15", remaining_amount=50),
    ]
    stats = summarize_daily_totals(build_schedule_suggestions(items, as_of))

    assert stats == {
        "2025-03-12": {"amount": 500, "count": 2},
        "2025-03-15": {"amount": 50, "count": 1},
    }


def test_plan_overdue_reschedule(make_item, as_of):
    items = [
        make_item(id=1, is_overdue=True, overdue_days=3, due_date="2025-03-07"),
        make_item(id=2, due_date="2025-03-30"),
        make_item(id=3, is_overdue=True, overdue_days=20, due_date="2025-02-18", category_type="rent"),
    ]
    proposals = plan_overdue_reschedule(items, 2025, 4, as_of)

    assert [p.item.id for p in proposals] == [3, 1]
    assert all(p.new_date == "2025-04-01" for p in proposals)
    assert proposals[0].original_date == "2025-02-18"
    assert proposals[0].note == "auto-rescheduled: originally due 2025-02-18, moved to 2025-04-01"


def test_plan_overdue_reschedule_clamps_day_to_month_end(make_item, as_of, monkeypatch):
    monkeypatch.setattr(settings, "reschedule_day", 31)
    items = [make_item(is_overdue=True, overdue_days=1)]

    proposals = plan_overdue_reschedule(items, 2025, 2, as_of)

    assert proposals[0].new_date == "2025-02-28"
    assert proposals[0].note.startswith("auto-rescheduled: originally due unscheduled")


@pytest.mark.parametrize("month", [0, 13])
def test_plan_overdue_reschedule_rejects_invalid_month(make_item, as_of, month):
    with pytest.raises(ValueError):
        plan_overdue_reschedule([make_item()], 2025, month, as_of)
