"""
Semantic test: restaurant configuration and catalog.

Invariant:
Configs are validated strictly (unknown keys and duplicate categories are
rejected as ConfigError); the in-memory menu built from a config assigns
stable ids and resolves 1-based category indexes case-insensitively.
"""

from __future__ import annotations

import json
from decimal import Decimal

import pytest

from order_desk.adapters.menu import InMemoryCustomerDirectory, InMemoryMenu
from order_desk.config.restaurant_config import RestaurantConfig
from order_desk.core.domain.errors import ConfigError
from order_desk.core.domain.types import CustomerInfo


def test_config_parses_menu_and_payment(restaurant_config) -> None:
    assert restaurant_config.name == "demo-kitchen"
    assert [c.name for c in restaurant_config.menu] == ["Pizza", "Beverages"]
    assert restaurant_config.payment.decline_over == Decimal("100")
    assert restaurant_config.event_log_path is None


def test_unknown_keys_are_rejected(config_obj) -> None:
    config_obj["tables"] = 12

    with pytest.raises(ConfigError):
        RestaurantConfig.from_json_obj(config_obj)


def test_duplicate_categories_are_rejected(config_obj) -> None:
    config_obj["menu"].append({"name": "pizza", "items": []})

    with pytest.raises(ConfigError, match="duplicate menu category"):
        RestaurantConfig.from_json_obj(config_obj)


def test_from_path(tmp_path, config_obj) -> None:
    path = tmp_path / "restaurant.json"
    path.write_text(json.dumps(config_obj), encoding="utf-8")

    assert RestaurantConfig.from_path(path).name == "demo-kitchen"

    with pytest.raises(FileNotFoundError):
        RestaurantConfig.from_path(tmp_path / "missing.json")


def test_menu_from_config(restaurant_config) -> None:
    menu = InMemoryMenu.from_config(restaurant_config)

    assert menu.categories() == ["Pizza", "Beverages"]
    assert menu.find_item("pizza", 1).name == "Margherita"
    assert menu.find_item("Beverages", 2).price == Decimal("1.99")
    assert menu.find_item("Pizza", 3) is None
    assert menu.find_item("Desserts", 1) is None
    assert menu.get_item(1).name == "Margherita"
    assert menu.get_item(99) is None
    assert [i.name for i in menu.items_in_category("Beverages")] == ["Coca Cola", "Water"]
    assert "1. Margherita - $12.99 (Pizza)" in menu.render()


def test_customer_directory_lookup() -> None:
    directory = InMemoryCustomerDirectory()
    directory.register(CustomerInfo(name="Alice Smith", phone="+1-555-0001"))

    assert directory.get_customer("+1-555-0001").name == "Alice Smith"
    assert directory.get_customer("+1-555-9999") is None
    assert len(directory) == 1
