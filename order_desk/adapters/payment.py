"""Simulated payment gateway.

Synchronous and deterministic: whether a charge succeeds depends only on the
amount, the configured limits and the customer, which makes replays of the
same scenario reproducible.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from order_desk.config.restaurant_config import PaymentSimulationConfig
from order_desk.core.domain.types import PaymentOutcome

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ChargeRecord:
    order_id: str
    amount: Decimal
    outcome: PaymentOutcome


class SimulatedPaymentGateway:
    """In-process stand-in for a card processor.

    Declines when:
    - the amount is not positive
    - the amount exceeds ``decline_over`` (if configured)
    - ``customer_lookup(order_id)`` names a customer in ``declined_customers``

    With ``record_charges=True`` every charge, redo re-charges included, is
    appended to ``charges``. The ledger stays empty otherwise.
    """

    def __init__(
        self,
        config: PaymentSimulationConfig | None = None,
        *,
        customer_lookup: Callable[[str], str | None] | None = None,
        record_charges: bool = False,
    ) -> None:
        self._config = config if config is not None else PaymentSimulationConfig()
        self._declined_customers = set(self._config.declined_customers)
        self._customer_lookup = customer_lookup
        self._txn_counter = itertools.count(1)
        self._record_charges = record_charges
        self.charges: list[ChargeRecord] = []

    def charge(self, amount: Decimal, order_id: str) -> PaymentOutcome:
        method = self._config.method
        reason = self._decline_reason(amount, order_id)

        if reason is not None:
            outcome = PaymentOutcome.declined(method=method, message=reason)
        else:
            outcome = PaymentOutcome(
                success=True,
                transaction_id=f"TXN-{next(self._txn_counter):06d}",
                method=method,
                message=f"Charged ${amount:.2f}",
            )

        if self._record_charges:
            self.charges.append(ChargeRecord(order_id=order_id, amount=amount, outcome=outcome))
        LOGGER.info(
            "Payment %s",
            "approved" if outcome.success else "declined",
            extra={"order_id": order_id, "amount": str(amount), "method": method},
        )
        return outcome

    def _decline_reason(self, amount: Decimal, order_id: str) -> str | None:
        if amount <= 0:
            return "Amount must be positive"

        limit = self._config.decline_over
        if limit is not None and amount > limit:
            return f"Amount ${amount:.2f} exceeds limit ${limit:.2f}"

        if self._declined_customers and self._customer_lookup is not None:
            customer = self._customer_lookup(order_id)
            if customer is not None and customer in self._declined_customers:
                return f"Card declined for {customer}"

        return None
