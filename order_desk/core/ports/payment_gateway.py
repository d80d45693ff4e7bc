"""Payment gateway protocol.

The order core charges an order through this boundary and only depends on
the returned ``PaymentOutcome``. Implementations are synchronous; a gateway
that cannot complete a request raises ``PaymentGatewayError``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from order_desk.core.domain.types import PaymentOutcome


class PaymentGateway(Protocol):
    """Charge boundary used by ``PlaceOrderCommand``."""

    def charge(self, amount: Decimal, order_id: str) -> PaymentOutcome:
        """Charge ``amount`` for ``order_id`` and report the outcome."""
