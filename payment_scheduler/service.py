"""Smart schedule service - outermost boundary around the priority engine"""

import logging
import time
import uuid
from datetime import datetime
from typing import Any, Collection, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from payment_scheduler.config import settings
from payment_scheduler.domain.exceptions import InvalidBudgetError
from payment_scheduler.domain.models import ScheduleItem
from payment_scheduler.domain.normalization import select_schedulable_items
from payment_scheduler.domain.priority import generate_smart_schedule, get_overdue_reschedule_items
from payment_scheduler.domain.suggestions import build_schedule_suggestions
from payment_scheduler.infrastructure.observability.logging import log_schedule, setup_logging
from payment_scheduler.infrastructure.observability.metrics import (
    invalid_budget_counter,
    record_schedule,
    schedule_duration_histogram,
)
from payment_scheduler.schemas import (
    PrioritizedItemPayload,
    ScheduleItemPayload,
    ScheduleSuggestionPayload,
    SmartScheduleResultPayload,
)

logger = logging.getLogger(__name__)


class SmartScheduleService:
    """
    Runs the priority engine for a caller such as a dashboard or report.

    This is the only place that reads the clock: every method accepts an
    explicit `as_of` and falls back to the current time when it is omitted.
    """

    def __init__(self, clock=datetime.now):
        self.clock = clock

    def _as_of(self, as_of: Optional[datetime]) -> datetime:
        return as_of if as_of is not None else self.clock()

    def suggest(
        self,
        payload_items: Iterable[Mapping[str, Any] | ScheduleItemPayload],
        budget: float,
        as_of: Optional[datetime] = None,
    ) -> SmartScheduleResultPayload:
        """
        Validate camelCase item payloads and allocate the budget across them.

        Raises:
            pydantic.ValidationError: an item payload is malformed
            InvalidBudgetError: budget is negative, not finite or not a real number
        """
        items = _validate_items(payload_items)
        return self._schedule(items, budget, self._as_of(as_of))

    def suggest_from_rows(
        self,
        rows: Iterable[Mapping[str, Any]],
        budget: float,
        as_of: Optional[datetime] = None,
        exclude_ids: Collection[int] = (),
    ) -> SmartScheduleResultPayload:
        """
        Normalize raw payment rows, then allocate the budget across them.

        Deleted, completed and fully paid rows are skipped, as are ids in
        `exclude_ids` (items that already have a schedule this month).
        """
        as_of = self._as_of(as_of)
        items = select_schedulable_items(rows, as_of, exclude_ids=exclude_ids)
        return self._schedule(items, budget, as_of)

    def overdue(
        self,
        payload_items: Iterable[Mapping[str, Any] | ScheduleItemPayload],
        as_of: Optional[datetime] = None,
    ) -> List[PrioritizedItemPayload]:
        """Overdue items, highest priority first"""
        items = _validate_items(payload_items)
        return [
            PrioritizedItemPayload.from_domain(item)
            for item in get_overdue_reschedule_items(items, self._as_of(as_of))
        ]

    def suggestions(
        self,
        payload_items: Iterable[Mapping[str, Any] | ScheduleItemPayload],
        as_of: Optional[datetime] = None,
    ) -> List[ScheduleSuggestionPayload]:
        """Scored items grouped by due date"""
        items = _validate_items(payload_items)
        return [
            ScheduleSuggestionPayload.from_domain(suggestion)
            for suggestion in build_schedule_suggestions(items, self._as_of(as_of))
        ]

    def _schedule(self, items: List[ScheduleItem], budget: float, as_of: datetime) -> SmartScheduleResultPayload:
        run_id = str(uuid.uuid4())
        start_time = time.time()

        try:
            with schedule_duration_histogram.time():
                result = generate_smart_schedule(items, budget, as_of)
        except InvalidBudgetError as e:
            invalid_budget_counter.inc()
            logger.warning(f"Invalid budget: {e}", extra={"run_id": run_id})
            raise

        record_schedule(result)
        duration_ms = (time.time() - start_time) * 1000
        log_schedule(
            run_id,
            len(items),
            len(result.scheduled_items),
            len(result.deferred_items),
            result.budget,
            result.total_needed,
            duration_ms,
        )

        return SmartScheduleResultPayload.from_domain(result)


def create_service(clock=datetime.now) -> SmartScheduleService:
    """Configure process logging and build a service, for use at application startup"""
    setup_logging(settings.log_level)
    logger.info("Smart schedule service starting", extra={"log_level": settings.log_level})
    return SmartScheduleService(clock=clock)


def _to_item(payload: Mapping[str, Any] | ScheduleItemPayload) -> ScheduleItem:
    if not isinstance(payload, ScheduleItemPayload):
        payload = ScheduleItemPayload.model_validate(payload)
    return payload.to_domain()


def _validate_items(payload_items: Iterable[Mapping[str, Any] | ScheduleItemPayload]) -> List[ScheduleItem]:
    try:
        return [_to_item(payload) for payload in payload_items]
    except ValidationError as e:
        logger.warning(f"Invalid schedule item payload: {e.error_count()} error(s)")
        raise
