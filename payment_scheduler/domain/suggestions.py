"""Date-keyed schedule suggestions and overdue reschedule proposals"""

import calendar
from datetime import date, datetime
from typing import Dict, Iterable, List

from payment_scheduler.config import settings
from payment_scheduler.domain.models import RescheduleProposal, ScheduleItem, ScheduleSuggestion
from payment_scheduler.domain.priority import get_overdue_reschedule_items, prioritize
from payment_scheduler.utils.date_utils import parse_iso_datetime


def build_schedule_suggestions(
    items: Iterable[ScheduleItem],
    as_of: date | datetime,
) -> List[ScheduleSuggestion]:
    """
    Group scored items by due date.

    Suggestions are ordered by date; within a date items keep descending
    priority order. Items without a parseable due date are left out.
    """
    by_date: Dict[date, list] = {}
    for item in prioritize(items, as_of):
        due = parse_iso_datetime(item.due_date)
        if due is None:
            continue
        by_date.setdefault(due.date(), []).append(item)

    return [
        ScheduleSuggestion(
            date=day.isoformat(),
            items=tuple(day_items),
            daily_total=sum(item.remaining_amount for item in day_items),
        )
        for day, day_items in sorted(by_date.items())
    ]


def summarize_daily_totals(suggestions: Iterable[ScheduleSuggestion]) -> Dict[str, Dict[str, float]]:
    """Amount and item count per suggestion date"""
    return {
        suggestion.date: {"amount": suggestion.daily_total, "count": len(suggestion.items)}
        for suggestion in suggestions
    }


def plan_overdue_reschedule(
    items: Iterable[ScheduleItem],
    target_year: int,
    target_month: int,
    as_of: date | datetime,
) -> List[RescheduleProposal]:
    """
    Propose moving every overdue item into the target month.

    All proposals land on the configured reschedule day, clamped to the
    month length. Nothing is persisted; callers apply the proposals.

    Raises:
        ValueError: target month is not 1-12
    """
    if not 1 <= target_month <= 12:
        raise ValueError(f"Target month must be 1-12, got {target_month}")

    last_day = calendar.monthrange(target_year, target_month)[1]
    day = min(max(settings.reschedule_day, 1), last_day)
    new_date = date(target_year, target_month, day).isoformat()

    return [
        RescheduleProposal(
            item=item,
            original_date=item.due_date,
            new_date=new_date,
            note=f"auto-rescheduled: originally due {item.due_date or 'unscheduled'}, moved to {new_date}",
        )
        for item in get_overdue_reschedule_items(items, as_of)
    ]
