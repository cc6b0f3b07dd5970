"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from payment_scheduler.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_schedule(
    run_id: str,
    item_count: int,
    scheduled_count: int,
    deferred_count: int,
    budget: float,
    total_needed: float,
    duration_ms: float,
) -> None:
    """Log structured smart schedule outcome for analysis"""
    logging.info(
        "Smart schedule completed",
        extra={
            "run_id": run_id,
            "step": "schedule_complete",
            "item_count": item_count,
            "scheduled_count": scheduled_count,
            "deferred_count": deferred_count,
            "budget": budget,
            "total_needed": total_needed,
            "budget_outcome": "over_budget" if total_needed > budget else "within_budget",
            "duration_ms": duration_ms,
        },
    )
