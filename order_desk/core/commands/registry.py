"""Keyed store of live orders."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from order_desk.core.domain.order import Order


class OrderRegistry:
    """Live orders keyed by order id.

    Commands resolve their target here. An order is registered when its
    placement succeeds and removed only when that placement is undone.
    """

    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}

    def add(self, order: Order) -> bool:
        """Register ``order``. Returns False if the id is already present."""
        if order.order_id in self._orders:
            return False
        self._orders[order.order_id] = order
        return True

    def get(self, order_id: str) -> Order | None:
        return self._orders.get(order_id)

    def remove(self, order_id: str) -> bool:
        """Remove an order. Idempotent: returns False if it was not present."""
        return self._orders.pop(order_id, None) is not None

    def orders(self) -> list[Order]:
        return list(self._orders.values())

    def __contains__(self, order_id: object) -> bool:
        return order_id in self._orders

    def __len__(self) -> int:
        return len(self._orders)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._orders))
