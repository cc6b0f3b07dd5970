"""Domain models - pure Python dataclasses representing scheduling entities"""

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple, get_args

PaymentType = Literal["single", "monthly", "installment", "recurring"]
CategoryType = Literal["rent", "insurance", "utility", "installment", "general"]
PriorityLevel = Literal["critical", "high", "medium", "low"]

PAYMENT_TYPES: Tuple[str, ...] = get_args(PaymentType)


@dataclass(frozen=True, kw_only=True)
class ScheduleItem:
    """Normalized payment item ready for priority scoring"""

    id: int
    item_name: str
    total_amount: float
    paid_amount: float
    remaining_amount: float  # total_amount - paid_amount, kept by the caller
    due_date: Optional[str] = None  # ISO date string
    payment_type: Optional[PaymentType] = None
    category_type: Optional[CategoryType] = None
    is_overdue: bool = False
    overdue_days: int = 0
    has_late_fee: bool = False
    project_name: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class PrioritizedItem(ScheduleItem):
    """ScheduleItem enriched with priority score, level and reason text"""

    priority: int
    priority_level: PriorityLevel
    reason: str


@dataclass(frozen=True)
class ScheduleSuggestion:
    """Prioritized items due on the same date"""

    date: str
    items: Tuple[PrioritizedItem, ...]
    daily_total: float


@dataclass(frozen=True)
class SmartScheduleResult:
    """Output of budget-constrained scheduling"""

    budget: float
    total_needed: float
    is_over_budget: bool
    critical_items: Tuple[PrioritizedItem, ...] = field(default_factory=tuple)
    scheduled_items: Tuple[PrioritizedItem, ...] = field(default_factory=tuple)
    deferred_items: Tuple[PrioritizedItem, ...] = field(default_factory=tuple)
    scheduled_total: float = 0
    remaining_budget: float = 0


@dataclass(frozen=True)
class RescheduleProposal:
    """Suggested new date for an overdue item"""

    item: PrioritizedItem
    original_date: Optional[str]
    new_date: str
    note: str
