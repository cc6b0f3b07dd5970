"""Normalization of raw payment rows into ScheduleItems"""

import math
import re
from datetime import date, datetime
from typing import Any, Collection, Iterable, List, Mapping, Optional, Tuple

from payment_scheduler.config import settings
from payment_scheduler.domain.exceptions import InvalidPaymentItemError
from payment_scheduler.domain.models import PAYMENT_TYPES, ScheduleItem
from payment_scheduler.utils.date_utils import align_timezone, ceil_days_between, parse_iso_datetime, to_datetime

# First match wins, so rent is checked before insurance and utility.
CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("rent", ("租金", "房租", "rent", "rental")),
    ("insurance", ("勞健保", "勞保", "健保", "insurance")),
    ("utility", ("水電", "電費", "水費", "utility", "electric", "water")),
)


def parse_amount(value: Any) -> float:
    """Parse a money amount, falling back to 0.0 for anything unusable"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def _matches(keyword: str, name: str) -> bool:
    # Latin keywords must be whole words: "rent" is not in "current" or "parent"
    if keyword.isascii():
        return re.search(rf"\b{re.escape(keyword)}\b", name) is not None
    return keyword in name


def classify_category(item_name: Optional[str]) -> str:
    """Infer the category type from keywords in the item name"""
    name = (item_name or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(_matches(keyword, name) for keyword in keywords):
            return category
    return "general"


def compute_overdue(due_date: Optional[str], as_of: date | datetime) -> Tuple[bool, int]:
    """
    Overdue status of a due date relative to as_of.

    Returns (is_overdue, overdue_days). Days are rounded up, so anything
    past due counts as at least one day late.
    """
    reference = to_datetime(as_of)
    due = parse_iso_datetime(due_date)
    if due is None:
        return False, 0
    due = align_timezone(due, reference)
    if due >= reference:
        return False, 0
    return True, max(0, ceil_days_between(due, reference))


def _payment_type(value: Any) -> str:
    # Unknown or missing types are treated as one-off payments
    return value if value in PAYMENT_TYPES else "single"


def build_schedule_item(row: Mapping[str, Any], as_of: date | datetime) -> ScheduleItem:
    """
    Build a ScheduleItem from a raw payment row.

    Rows use the camelCase keys of the payment listing: id, itemName,
    totalAmount, paidAmount, startDate, endDate, paymentType, projectName.
    The end date wins over the start date as the due date.

    Raises:
        InvalidPaymentItemError: row has no usable id
    """
    try:
        item_id = int(row["id"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidPaymentItemError(f"Payment item without a valid id: {e}") from e

    total = parse_amount(row.get("totalAmount"))
    paid = parse_amount(row.get("paidAmount"))
    due_date = row.get("endDate") or row.get("startDate") or None
    is_overdue, overdue_days = compute_overdue(due_date, as_of)
    item_name = row.get("itemName") or ""
    category_type = classify_category(item_name)

    return ScheduleItem(
        id=item_id,
        item_name=item_name,
        total_amount=total,
        paid_amount=paid,
        remaining_amount=max(total - paid, 0.0),
        due_date=due_date,
        payment_type=_payment_type(row.get("paymentType")),
        category_type=category_type,
        is_overdue=is_overdue,
        overdue_days=overdue_days,
        has_late_fee=category_type in settings.late_fee_categories,
        project_name=row.get("projectName"),
    )


def is_schedulable(row: Mapping[str, Any]) -> bool:
    """Open rows only: not deleted, not completed, not fully paid"""
    if row.get("isDeleted") or row.get("status") == "completed":
        return False
    return parse_amount(row.get("paidAmount")) < parse_amount(row.get("totalAmount"))


def select_schedulable_items(
    rows: Iterable[Mapping[str, Any]],
    as_of: date | datetime,
    exclude_ids: Collection[int] = (),
) -> List[ScheduleItem]:
    """Normalize open payment rows, skipping ids that already have a schedule"""
    excluded = set(exclude_ids)
    items = []
    for row in rows:
        if not is_schedulable(row):
            continue
        item = build_schedule_item(row, as_of)
        if item.id in excluded:
            continue
        items.append(item)
    return items
