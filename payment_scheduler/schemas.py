"""Pydantic schemas for the camelCase JSON contract shared with callers"""

from dataclasses import asdict
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from payment_scheduler.domain.models import (
    CategoryType,
    PaymentType,
    PrioritizedItem,
    PriorityLevel,
    ScheduleItem,
    ScheduleSuggestion,
    SmartScheduleResult,
)


class CamelModel(BaseModel):
    """Base model accepting either camelCase aliases or field names"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScheduleItemPayload(CamelModel):
    """Normalized payment item as supplied by the payment listing"""

    id: int
    item_name: str = Field(..., description="Display name")
    total_amount: float
    paid_amount: float = 0
    remaining_amount: float
    due_date: Optional[str] = Field(None, description="ISO date, absent when unscheduled")
    payment_type: Optional[PaymentType] = None
    category_type: Optional[CategoryType] = None
    is_overdue: bool = False
    overdue_days: int = Field(0, ge=0)
    has_late_fee: bool = False
    project_name: Optional[str] = None

    @model_validator(mode="after")
    def check_overdue_days(self):
        if self.is_overdue != (self.overdue_days > 0):
            raise ValueError("overdueDays must be positive exactly when isOverdue is true")
        return self

    def to_domain(self) -> ScheduleItem:
        return ScheduleItem(**self.model_dump(include=set(ScheduleItemPayload.model_fields)))


class PrioritizedItemPayload(ScheduleItemPayload):
    """Payment item with its priority score, level and reason"""

    priority: int
    priority_level: PriorityLevel
    reason: str

    @classmethod
    def from_domain(cls, item: PrioritizedItem) -> "PrioritizedItemPayload":
        return cls(**asdict(item))


class ScheduleSuggestionPayload(CamelModel):
    """Items due on one date"""

    date: str
    items: List[PrioritizedItemPayload]
    daily_total: float

    @classmethod
    def from_domain(cls, suggestion: ScheduleSuggestion) -> "ScheduleSuggestionPayload":
        return cls(
            date=suggestion.date,
            items=[PrioritizedItemPayload.from_domain(item) for item in suggestion.items],
            daily_total=suggestion.daily_total,
        )


class SmartScheduleResultPayload(CamelModel):
    """Budget allocation summary rendered by dashboards"""

    budget: float
    total_needed: float
    is_over_budget: bool
    critical_items: List[PrioritizedItemPayload]
    scheduled_items: List[PrioritizedItemPayload]
    deferred_items: List[PrioritizedItemPayload]
    scheduled_total: float
    remaining_budget: float

    @classmethod
    def from_domain(cls, result: SmartScheduleResult) -> "SmartScheduleResultPayload":
        def convert(items):
            return [PrioritizedItemPayload.from_domain(item) for item in items]

        return cls(
            budget=result.budget,
            total_needed=result.total_needed,
            is_over_budget=result.is_over_budget,
            critical_items=convert(result.critical_items),
            scheduled_items=convert(result.scheduled_items),
            deferred_items=convert(result.deferred_items),
            scheduled_total=result.scheduled_total,
            remaining_budget=result.remaining_budget,
        )
