"""Order aggregate and its builder.

An ``Order`` owns its current lifecycle state, its line items and the outcome
of its payment attempt. State only changes through ``advance()``,
``cancel()`` and ``restore_state()``; each change is published on the
order's event bus.
"""

# pylint: disable=too-many-instance-attributes
from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

from pydantic import ValidationError as PydanticValidationError

from order_desk.core.domain import order_state_machine
from order_desk.core.domain.errors import OrderValidationError
from order_desk.core.domain.order_ids import random_order_id
from order_desk.core.domain.order_state_machine import OrderState, Transition
from order_desk.core.domain.types import CustomerInfo, LineItem, MenuItem, PaymentOutcome
from order_desk.core.events.events import (
    OrderCancelledEvent,
    OrderStatusChangedEvent,
    PaymentProcessedEvent,
)
from order_desk.core.events.sinks.null_event_bus import NullEventBus

if TYPE_CHECKING:
    from order_desk.core.events.event_bus import EventBus


class Order:
    """A customer order moving through the lifecycle state machine.

    Orders are created by ``OrderBuilder.build()`` or ``build_order()``, which
    guarantee at least one line item and a non-blank customer name.
    """

    def __init__(
        self,
        *,
        order_id: str,
        items: Sequence[LineItem],
        customer: CustomerInfo,
        event_bus: EventBus,
        email: str = "",
        delivery_address: str = "",
        special_instructions: str = "",
    ) -> None:
        self._order_id = order_id
        self._items: tuple[LineItem, ...] = tuple(items)
        self._customer = customer
        self._event_bus = event_bus

        self.email = email
        self.delivery_address = delivery_address
        self.special_instructions = special_instructions

        self._state: OrderState = OrderState.PENDING
        self._payment_outcome: PaymentOutcome | None = None

    def __repr__(self) -> str:
        return f"Order(order_id={self._order_id!r}, status={self._state.value})"

    # ---- Identity & content ----
    @property
    def order_id(self) -> str:
        return self._order_id

    @property
    def items(self) -> list[LineItem]:
        return list(self._items)

    @property
    def customer(self) -> CustomerInfo:
        return self._customer

    @property
    def payment_outcome(self) -> PaymentOutcome | None:
        return self._payment_outcome

    def total_value(self) -> Decimal:
        """Sum of unit price times quantity over all line items."""
        return sum((item.total_price for item in self._items), Decimal("0"))

    # ---- State ----
    @property
    def status(self) -> OrderState:
        return self._state

    def can_cancel(self) -> bool:
        return self._state.can_cancel

    def can_modify(self) -> bool:
        return self._state.can_modify

    def advance(self) -> Transition:
        """Move one step forward. Terminal states stay where they are."""
        transition = order_state_machine.advance(self._state)
        if transition.changed:
            self._apply(transition.next_state, reason="advance", narration=transition.narration)
        return transition

    def cancel(self) -> bool:
        """Cancel the order if the current state allows it.

        Returns True iff the state changed to CANCELLED.
        """
        transition = order_state_machine.cancel(self._state)
        if not transition.changed:
            return False

        self._apply(transition.next_state, reason="cancel", narration=transition.narration)
        self._event_bus.emit(
            OrderCancelledEvent(
                order_id=self._order_id,
                prev_state=transition.prev_state.value,
            )
        )
        return True

    def restore_state(self, state: OrderState) -> None:
        """Overwrite the current state, bypassing the transition table.

        Used by command undo; several earlier states are not reachable
        backwards through the normal transitions.
        """
        state = OrderState(state)
        if state is self._state:
            return
        self._apply(state, reason="restore", narration=f"Order restored to {state.value}.")

    def set_payment_outcome(self, outcome: PaymentOutcome) -> None:
        self._payment_outcome = outcome
        self._event_bus.emit(
            PaymentProcessedEvent(
                order_id=self._order_id,
                amount=str(self.total_value()),
                success=outcome.success,
                transaction_id=outcome.transaction_id,
                method=outcome.method,
                message=outcome.message,
            )
        )

    def _apply(self, next_state: OrderState, *, reason: str, narration: str) -> None:
        prev_state = self._state
        self._state = next_state
        self._event_bus.emit(
            OrderStatusChangedEvent(
                order_id=self._order_id,
                prev_state=prev_state.value,
                next_state=next_state.value,
                reason=reason,
                narration=narration,
            )
        )

    # ---- Presentation helpers ----
    def summary(self) -> str:
        lines = [
            "ORDER SUMMARY",
            f"Order: {self._order_id}",
            f"Customer: {self._customer.name}",
        ]
        if self._customer.phone:
            lines.append(f"Phone: {self._customer.phone}")
        if self.email:
            lines.append(f"Email: {self.email}")
        if self.delivery_address:
            lines.append(f"Delivery Address: {self.delivery_address}")

        lines.append(
            f"Status: {self._state.value} "
            f"(Can cancel: {self.can_cancel()}, Can modify: {self.can_modify()})"
        )
        lines.append("Items:")
        for item in self._items:
            lines.append(f"  - {item.description()}: ${item.total_price:.2f}")
        lines.append(f"Total: ${self.total_value():.2f}")

        if self.special_instructions:
            lines.append(f"Special Instructions: {self.special_instructions}")
        if self._payment_outcome is not None:
            verdict = "paid" if self._payment_outcome.success else "declined"
            lines.append(f"Payment: {verdict} via {self._payment_outcome.method}")
        return "\n".join(lines)


class OrderBuilder:
    """Fluent builder that validates an order before constructing it."""

    def __init__(
        self,
        customer_name: str,
        customer_phone: str = "",
        *,
        event_bus: EventBus | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._customer_name = customer_name
        self._customer_phone = customer_phone
        self._event_bus = event_bus
        self._id_factory = id_factory or random_order_id

        self._items: list[LineItem] = []
        self._email = ""
        self._delivery_address = ""
        self._special_instructions = ""

    def set_email(self, email: str) -> OrderBuilder:
        self._email = email
        return self

    def set_delivery_address(self, delivery_address: str) -> OrderBuilder:
        self._delivery_address = delivery_address
        return self

    def set_special_instructions(self, special_instructions: str) -> OrderBuilder:
        self._special_instructions = special_instructions
        return self

    def add_item(
        self,
        item: MenuItem | None,
        quantity: int = 1,
        customizations: Iterable[str] = (),
    ) -> OrderBuilder:
        if item is None:
            raise OrderValidationError("Menu item not found")
        try:
            line = LineItem(menu_item=item, quantity=quantity, customizations=tuple(customizations))
        except PydanticValidationError as exc:
            raise OrderValidationError(f"Invalid line item for {item.name!r}: {exc}") from exc
        self._items.append(line)
        return self

    def build(self) -> Order:
        if not self._items:
            raise OrderValidationError("Order must contain at least one item")
        if self._customer_name is None or not self._customer_name.strip():
            raise OrderValidationError("Customer name is required")

        customer = CustomerInfo(
            name=self._customer_name,
            phone=self._customer_phone,
            email=self._email,
        )
        return Order(
            order_id=self._id_factory(),
            items=self._items,
            customer=customer,
            event_bus=self._event_bus if self._event_bus is not None else NullEventBus(),
            email=self._email,
            delivery_address=self._delivery_address,
            special_instructions=self._special_instructions,
        )


def build_order(
    items: Iterable[LineItem],
    customer: CustomerInfo,
    *,
    event_bus: EventBus | None = None,
    id_factory: Callable[[], str] | None = None,
) -> Order:
    """Build an order from already-formed line items and a customer record."""
    builder = OrderBuilder(
        customer.name,
        customer.phone,
        event_bus=event_bus,
        id_factory=id_factory,
    ).set_email(customer.email)
    for line in items:
        builder.add_item(line.menu_item, line.quantity, line.customizations)
    return builder.build()
