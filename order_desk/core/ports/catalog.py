"""Catalog and customer lookup protocols.

These are passive data providers consulted while an order is being built.
A lookup that finds nothing returns None.
"""

from __future__ import annotations

from typing import Protocol

from order_desk.core.domain.types import CustomerInfo, MenuItem


class MenuCatalog(Protocol):
    def get_item(self, item_id: int) -> MenuItem | None:
        """Return the menu item with ``item_id``, or None."""

    def find_item(self, category: str, index: int) -> MenuItem | None:
        """Return the 1-based ``index``-th item of ``category``, or None."""


class CustomerDirectory(Protocol):
    def get_customer(self, phone: str) -> CustomerInfo | None:
        """Return the customer registered under ``phone``, or None."""
