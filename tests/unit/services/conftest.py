"""Shared fixtures for ledger service tests."""

from datetime import timedelta

import pytest

from src.core.entities import WorkOrder


@pytest.fixture
def new_order(now):
    """Factory for a work order that is not yet in the ledger."""

    def _make(order_id: str = "OT.2000", **overrides) -> WorkOrder:
        data = {
            "id": order_id,
            "title": "Pump housing repair",
            "client_id": "HydraSystems",
            "creation_date": now,
            "estimated_completion_date": now + timedelta(days=5),
        }
        data.update(overrides)
        return WorkOrder(**data)

    return _make

