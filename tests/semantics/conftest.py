"""Shared fixtures for semantic tests."""

# pylint: disable=redefined-outer-name
from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest

from order_desk.config.restaurant_config import RestaurantConfig
from order_desk.core.domain.types import MenuItem, PaymentOutcome


class RecordingSink:
    """Collects every event it receives."""

    def __init__(self) -> None:
        self.events: list[Any] = []

    def on_event(self, event: Any) -> None:
        self.events.append(event)

    def of_type(self, cls: type) -> list[Any]:
        return [e for e in self.events if isinstance(e, cls)]


class ScriptedGateway:
    """Payment gateway returning queued outcomes; approves once the script runs out."""

    def __init__(self, *results: bool) -> None:
        self._results = list(results)
        self.calls: list[tuple[Decimal, str]] = []

    def charge(self, amount: Decimal, order_id: str) -> PaymentOutcome:
        self.calls.append((amount, order_id))
        ok = self._results.pop(0) if self._results else True
        return PaymentOutcome(
            success=ok,
            transaction_id=f"T{len(self.calls)}" if ok else "",
            method="test",
            message="approved" if ok else "declined",
        )


@pytest.fixture
def margherita() -> MenuItem:
    return MenuItem(item_id=1, name="Margherita", price=Decimal("12.99"), category="Pizza")


@pytest.fixture
def cola() -> MenuItem:
    return MenuItem(item_id=7, name="Coca Cola", price=Decimal("2.99"), category="Beverages")


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def config_obj() -> dict[str, Any]:
    return {
        "name": "demo-kitchen",
        "currency": "USD",
        "menu": [
            {
                "name": "Pizza",
                "items": [
                    {"name": "Margherita", "description": "Classic tomato and mozzarella", "price": "12.99"},
                    {"name": "Pepperoni", "description": "Pepperoni with cheese", "price": "14.99"},
                ],
            },
            {
                "name": "Beverages",
                "items": [
                    {"name": "Coca Cola", "description": "Refreshing cola", "price": "2.99"},
                    {"name": "Water", "description": "Bottled water", "price": "1.99"},
                ],
            },
        ],
        "payment": {"method": "credit_card", "decline_over": "100", "declined_customers": ["Mallory"]},
    }


@pytest.fixture
def restaurant_config(config_obj: dict[str, Any]) -> RestaurantConfig:
    return RestaurantConfig.from_json_obj(config_obj)


@pytest.fixture
def make_gateway() -> type[ScriptedGateway]:
    return ScriptedGateway
