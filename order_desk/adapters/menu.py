"""In-memory catalog and customer directory adapters."""

from __future__ import annotations

import itertools
from decimal import Decimal
from typing import TYPE_CHECKING

from order_desk.core.domain.types import CustomerInfo, MenuItem

if TYPE_CHECKING:
    from order_desk.config.restaurant_config import RestaurantConfig


class InMemoryMenu:
    """Menu catalog keyed by item id and grouped by category.

    Category lookups are case-insensitive; item ids are assigned in
    insertion order starting at 1.
    """

    def __init__(self) -> None:
        self._items: dict[int, MenuItem] = {}
        # lower-cased name -> (display name, items)
        self._categories: dict[str, tuple[str, list[MenuItem]]] = {}
        self._next_id = itertools.count(1)

    @classmethod
    def from_config(cls, config: RestaurantConfig) -> InMemoryMenu:
        menu = cls()
        for category in config.menu:
            menu.add_category(category.name)
            for item in category.items:
                menu.add_item(
                    name=item.name,
                    price=item.price,
                    category=category.name,
                    description=item.description,
                )
        return menu

    def add_category(self, name: str) -> None:
        self._categories.setdefault(name.lower(), (name, []))

    def add_item(
        self,
        *,
        name: str,
        price: Decimal | str,
        category: str,
        description: str = "",
    ) -> MenuItem:
        self.add_category(category)
        display_name, items = self._categories[category.lower()]
        item = MenuItem(
            item_id=next(self._next_id),
            name=name,
            description=description,
            price=Decimal(str(price)),
            category=display_name,
        )
        items.append(item)
        self._items[item.item_id] = item
        return item

    def get_item(self, item_id: int) -> MenuItem | None:
        return self._items.get(item_id)

    def items_in_category(self, category: str) -> list[MenuItem]:
        entry = self._categories.get(category.lower())
        return list(entry[1]) if entry is not None else []

    def categories(self) -> list[str]:
        return [display for display, _ in self._categories.values()]

    def find_item(self, category: str, index: int) -> MenuItem | None:
        items = self.items_in_category(category)
        if 1 <= index <= len(items):
            return items[index - 1]
        return None

    def render(self) -> str:
        lines = ["RESTAURANT MENU"]
        for display, items in self._categories.values():
            lines.append(f"{display.upper()}:")
            for pos, item in enumerate(items, start=1):
                lines.append(f"  {pos}. {item.info()}")
        return "\n".join(lines)


class InMemoryCustomerDirectory:
    """Customer records keyed by phone number."""

    def __init__(self) -> None:
        self._customers: dict[str, CustomerInfo] = {}

    def register(self, customer: CustomerInfo) -> None:
        self._customers[customer.phone] = customer

    def get_customer(self, phone: str) -> CustomerInfo | None:
        return self._customers.get(phone)

    def __len__(self) -> int:
        return len(self._customers)
