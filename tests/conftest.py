"""Pytest fixtures for testing"""

import pytest
from datetime import datetime
from typing import Callable

from payment_scheduler.domain.models import ScheduleItem


# Midnight reference so due-date distances are whole days
AS_OF = datetime(2025, 3, 10)


@pytest.fixture
def as_of() -> datetime:
    """Fixed 'now' for deterministic due-date rules"""
    return AS_OF


@pytest.fixture
def make_item() -> Callable[..., ScheduleItem]:
    """Factory for ScheduleItems with neutral defaults (scores 0, level low)"""

    def factory(**overrides) -> ScheduleItem:
        fields = {
            "id": 1,
            "item_name": "Office supplies",
            "total_amount": 10000,
            "paid_amount": 0,
            "remaining_amount": 10000,
            "is_overdue": False,
            "overdue_days": 0,
            "has_late_fee": False,
        }
        fields.update(overrides)
        return ScheduleItem(**fields)

    return factory


@pytest.fixture
def sample_rows() -> list[dict]:
    """Raw payment rows as returned by the payment listing"""
    return [
        {
            "id": 1,
            "itemName": "三月租金",
            "totalAmount": "30000.00",
            "paidAmount": "0",
            "endDate": "2025-03-05",
            "paymentType": "monthly",
            "projectName": "Harbor Inn",
        },
        {
            "id": 2,
            "itemName": "勞健保 March",
            "totalAmount": "8000",
            "paidAmount": "2000",
            "startDate": "2025-03-12",
            "paymentType": "single",
        },
        {
            "id": 3,
            "itemName": "Water bill",
            "totalAmount": "1500",
            "paidAmount": None,
            "startDate": "2025-03-25",
        },
        {
            "id": 4,
            "itemName": "Paid off laptop",
            "totalAmount": "20000",
            "paidAmount": "20000",
            "endDate": "2025-02-01",
            "paymentType": "installment",
        },
        {
            "id": 5,
            "itemName": "Old deleted item",
            "totalAmount": "500",
            "paidAmount": "0",
            "isDeleted": True,
        },
        {
            "id": 6,
            "itemName": "Renovation deposit",
            "totalAmount": "5000",
            "paidAmount": "0",
            "status": "completed",
        },
    ]
