"""Restaurant configuration models.

This module defines the RestaurantConfig schema used to parse menu, payment
simulation and recording settings from JSON into the objects a
``Restaurant`` session is built from.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from order_desk.core.domain.errors import ConfigError


class MenuItemConfig(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    price: Decimal = Field(..., ge=0)

    model_config = ConfigDict(extra="forbid")


class MenuCategoryConfig(BaseModel):
    name: str = Field(..., min_length=1)
    items: list[MenuItemConfig] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class PaymentSimulationConfig(BaseModel):
    """Settings for the in-process simulated payment gateway."""

    method: str = Field("credit_card", min_length=1)
    # Charges strictly above this amount are declined. None disables the limit.
    decline_over: Decimal | None = Field(default=None, ge=0)
    # Orders for these customer names are always declined.
    declined_customers: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class RestaurantConfig(BaseModel):
    """Structured restaurant configuration.

    JSON example:
        {
          "name": "demo-kitchen",
          "currency": "USD",
          "menu": [
            {"name": "Pizza", "items": [{"name": "Margherita", "price": "12.99"}]}
          ],
          "payment": {"method": "credit_card", "decline_over": "500"}
        }
    """

    name: str = Field(..., min_length=1)
    currency: str = Field("USD", min_length=1)
    menu: list[MenuCategoryConfig] = Field(default_factory=list)
    payment: PaymentSimulationConfig = Field(default_factory=PaymentSimulationConfig)
    event_log_path: str | None = None

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> RestaurantConfig:
        """Create a RestaurantConfig instance from a JSON-compatible object."""
        try:
            return cls.model_validate(obj)
        except PydanticValidationError as exc:
            raise ConfigError(f"Invalid restaurant config: {exc}") from exc

    @classmethod
    def from_path(cls, path: str | Path) -> RestaurantConfig:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(path)
        try:
            obj = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Config {path} is not valid JSON: {exc}") from exc
        return cls.from_json_obj(obj)

    @model_validator(mode="after")
    def validate_unique_categories(self) -> RestaurantConfig:
        """Category names are case-insensitive lookup keys and must be unique."""
        seen: set[str] = set()
        for category in self.menu:
            key = category.name.lower()
            if key in seen:
                raise ValueError(f"duplicate menu category: {category.name}")
            seen.add(key)
        return self
