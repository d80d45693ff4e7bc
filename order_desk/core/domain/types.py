"""Core shared data models.

This module defines the canonical Pydantic models used across the system for
catalog items, order line items, customers and payment outcomes. They are
immutable value objects; the mutable order aggregate lives in ``order.py``.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Catalog models
# ---------------------------------------------------------------------------


class MenuItem(BaseModel):
    item_id: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)
    description: str = ""
    price: Decimal = Field(..., ge=0)
    category: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def info(self) -> str:
        return f"{self.name} - ${self.price:.2f} ({self.category})"


# ---------------------------------------------------------------------------
# Order content models
# ---------------------------------------------------------------------------


class LineItem(BaseModel):
    """
    One line of an order.

    Notes:
    - quantity is always >= 1; zero-quantity lines are rejected at build time.
    - customizations are free-form strings ("Extra cheese", "No onions").
    """

    menu_item: MenuItem
    quantity: int = Field(..., ge=1)
    customizations: tuple[str, ...] = ()

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def total_price(self) -> Decimal:
        return self.menu_item.price * self.quantity

    def description(self) -> str:
        desc = f"{self.menu_item.name} x{self.quantity}"
        if self.customizations:
            desc += f" ({', '.join(self.customizations)})"
        return desc


class CustomerInfo(BaseModel):
    # Blank names are rejected by the order builder, not here.
    name: str
    phone: str = ""
    email: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


# ---------------------------------------------------------------------------
# Payment models
# ---------------------------------------------------------------------------


class PaymentOutcome(BaseModel):
    success: bool
    transaction_id: str = ""
    method: str = Field(..., min_length=1)
    message: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def declined(cls, *, method: str, message: str) -> PaymentOutcome:
        return cls(success=False, transaction_id="", method=method, message=message)
