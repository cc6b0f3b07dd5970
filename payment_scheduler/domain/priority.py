"""Payment priority engine - scoring, tiering and budget-constrained scheduling"""

import math
import numbers
from dataclasses import asdict, dataclass, fields
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, List, Optional, Tuple, Union

from payment_scheduler.config import settings
from payment_scheduler.domain.exceptions import InvalidBudgetError
from payment_scheduler.domain.models import PrioritizedItem, ScheduleItem, SmartScheduleResult
from payment_scheduler.utils.date_utils import days_until


@dataclass(frozen=True)
class PriorityRule:
    """
    One additive scoring rule.

    `applies` receives the item and its days until due (None when the item
    has no usable due date). `label` is formatted with the item's fields.
    """

    name: str
    score: int
    applies: Callable[[ScheduleItem, Optional[int]], bool]
    label: str

    def describe(self, item: ScheduleItem) -> str:
        return self.label.format(**asdict(item))


def _due_between(low: int, high: int) -> Callable[[ScheduleItem, Optional[int]], bool]:
    return lambda item, days: days is not None and low <= days <= high


# Evaluation order only affects the reason text; scores are summed.
PRIORITY_RULES: Tuple[PriorityRule, ...] = (
    PriorityRule("overdue", 100, lambda item, days: item.is_overdue, "overdue {overdue_days} days"),
    PriorityRule("late_fee", 80, lambda item, days: item.has_late_fee, "late-fee risk"),
    PriorityRule("rent", 60, lambda item, days: item.category_type == "rent", "rent contract"),
    PriorityRule("insurance", 50, lambda item, days: item.category_type == "insurance", "mandatory insurance"),
    PriorityRule("due_within_3_days", 40, _due_between(0, 3), "due within 3 days"),
    PriorityRule("due_within_7_days", 20, _due_between(4, 7), "due within 7 days"),
    PriorityRule("installment", 30, lambda item, days: item.payment_type == "installment", "installment obligation"),
    PriorityRule("monthly", 15, lambda item, days: item.payment_type == "monthly", "monthly payment"),
)

# (minimum score, level), checked from the highest threshold down
PRIORITY_LEVEL_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (100, "critical"),
    (50, "high"),
    (20, "medium"),
)


def classify_priority_level(priority: int) -> str:
    """
    Map a priority score to its tier.

    - 100+:   critical
    - 50-99:  high
    - 20-49:  medium
    - below:  low
    """
    for threshold, level in PRIORITY_LEVEL_THRESHOLDS:
        if priority >= threshold:
            return level
    return "low"


def _item_fields(item: ScheduleItem) -> dict:
    return {f.name: getattr(item, f.name) for f in fields(ScheduleItem)}


def triggered_rules(item: ScheduleItem, as_of: date | datetime) -> List[PriorityRule]:
    """Rules that fire for an item, in evaluation order"""
    days = days_until(item.due_date, as_of)
    return [rule for rule in PRIORITY_RULES if rule.applies(item, days)]


def calculate_priority(item: ScheduleItem, as_of: date | datetime) -> PrioritizedItem:
    """
    Score a single payment item.

    Never raises for missing or malformed optional fields; the matching
    rule simply does not fire.
    """
    rules = triggered_rules(item, as_of)
    priority = sum(rule.score for rule in rules)
    reasons = [rule.describe(item) for rule in rules]

    return PrioritizedItem(
        **_item_fields(item),
        priority=priority,
        priority_level=classify_priority_level(priority),
        reason=settings.reason_separator.join(reasons) or settings.fallback_reason,
    )


def prioritize(items: Iterable[ScheduleItem], as_of: date | datetime) -> List[PrioritizedItem]:
    """Score items and sort by descending priority, keeping input order on ties"""
    scored = [calculate_priority(item, as_of) for item in items]
    return sorted(scored, key=lambda item: item.priority, reverse=True)


def validate_budget(budget: Union[float, Decimal]) -> float:
    """
    Normalize a budget to float, rejecting values the greedy walk cannot allocate.

    Real numbers and Decimal are accepted. Booleans, complex numbers and
    anything non-numeric are not.

    Raises:
        InvalidBudgetError: budget is not a real number, not finite, or negative
    """
    if isinstance(budget, bool) or not isinstance(budget, (numbers.Real, Decimal)):
        raise InvalidBudgetError(f"Budget must be a real number, got {budget!r}")
    try:
        value = float(budget)
    except (ValueError, OverflowError) as e:
        raise InvalidBudgetError(f"Budget must be finite, got {budget}") from e
    if not math.isfinite(value):
        raise InvalidBudgetError(f"Budget must be finite, got {budget}")
    if value < 0:
        raise InvalidBudgetError(f"Budget cannot be negative, got {budget}")
    return value


def generate_smart_schedule(
    items: Iterable[ScheduleItem],
    budget: float,
    as_of: date | datetime,
) -> SmartScheduleResult:
    """
    Allocate a cash budget across payment items by priority.

    Steps:
    1. Score and stable-sort items by descending priority
    2. Flag critical/high items regardless of budget
    3. Walk the sorted list once; an item is scheduled whole if the running
       budget covers its remaining amount, otherwise deferred

    Skipped items are never revisited, even if a later smaller item would
    have left room for them.

    Raises:
        InvalidBudgetError: budget is negative, non-finite or not a number
    """
    budget = validate_budget(budget)

    prioritized = prioritize(items, as_of)
    total_needed = sum(item.remaining_amount for item in prioritized)

    critical_items = tuple(item for item in prioritized if item.priority_level in ("critical", "high"))

    remaining_budget = budget
    scheduled: List[PrioritizedItem] = []
    deferred: List[PrioritizedItem] = []

    for item in prioritized:
        if remaining_budget >= item.remaining_amount:
            scheduled.append(item)
            remaining_budget -= item.remaining_amount
        else:
            deferred.append(item)

    return SmartScheduleResult(
        budget=budget,
        total_needed=total_needed,
        is_over_budget=total_needed > budget,
        critical_items=critical_items,
        scheduled_items=tuple(scheduled),
        deferred_items=tuple(deferred),
        scheduled_total=budget - remaining_budget,
        remaining_budget=remaining_budget,
    )


def get_overdue_reschedule_items(
    items: Iterable[ScheduleItem],
    as_of: date | datetime,
) -> List[PrioritizedItem]:
    """Overdue items only, scored and sorted by descending priority"""
    return prioritize((item for item in items if item.is_overdue), as_of)
