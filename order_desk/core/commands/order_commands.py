"""Concrete order commands: place, advance, cancel and macro."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from order_desk.core.commands.base import Command
from order_desk.core.domain.errors import PaymentGatewayError
from order_desk.core.domain.failure_reasons import CommandFailure
from order_desk.core.domain.types import PaymentOutcome
from order_desk.core.events.events import OrderPlacedEvent

if TYPE_CHECKING:
    from order_desk.core.commands.registry import OrderRegistry
    from order_desk.core.domain.order import Order
    from order_desk.core.domain.order_state_machine import OrderState
    from order_desk.core.events.event_bus import EventBus
    from order_desk.core.ports.payment_gateway import PaymentGateway

LOGGER = logging.getLogger(__name__)


class PlaceOrderCommand(Command):
    """Charge an order and, if paid, register it as live."""

    def __init__(
        self,
        order: Order,
        registry: OrderRegistry,
        payment_gateway: PaymentGateway,
        event_bus: EventBus,
        *,
        payment_method: str = "unknown",
    ) -> None:
        super().__init__()
        self.order = order
        self._registry = registry
        self._payment_gateway = payment_gateway
        self._event_bus = event_bus
        self._payment_method = payment_method

    @property
    def order_id(self) -> str:
        return self.order.order_id

    def execute(self) -> bool:
        if self.order.order_id in self._registry:
            return self._fail(CommandFailure.ALREADY_REGISTERED)

        amount = self.order.total_value()
        try:
            outcome = self._payment_gateway.charge(amount, self.order.order_id)
        except PaymentGatewayError as exc:
            LOGGER.warning(
                "Payment gateway error",
                extra={"order_id": self.order.order_id, "error": str(exc)},
            )
            self.order.set_payment_outcome(
                PaymentOutcome.declined(method=self._payment_method, message=str(exc))
            )
            return self._fail(CommandFailure.PAYMENT_GATEWAY_ERROR)

        self.order.set_payment_outcome(outcome)
        if not outcome.success:
            return self._fail(CommandFailure.PAYMENT_DECLINED)

        self._registry.add(self.order)
        self._event_bus.emit(
            OrderPlacedEvent(
                order_id=self.order.order_id,
                customer_name=self.order.customer.name,
                total_value=str(amount),
                item_count=len(self.order.items),
            )
        )
        return self._succeed()

    def undo(self) -> None:
        self._registry.remove(self.order.order_id)

    def describe(self) -> str:
        return (
            f"Place order {self.order.order_id} for {self.order.customer.name} "
            f"(${self.order.total_value():.2f})"
        )


class _SnapshotCommand(Command):
    """Shared plumbing for commands that restore a captured state on undo."""

    def __init__(self, order_id: str, registry: OrderRegistry) -> None:
        super().__init__()
        self.order_id = order_id
        self._registry = registry
        self._snapshot: OrderState | None = None

    @property
    def snapshot(self) -> OrderState | None:
        """State captured by the most recent successful ``execute()``."""
        return self._snapshot

    def undo(self) -> None:
        if self._snapshot is None:
            return
        order = self._registry.get(self.order_id)
        if order is None:
            LOGGER.warning("Undo target no longer registered", extra={"order_id": self.order_id})
            return
        order.restore_state(self._snapshot)


class AdvanceOrderCommand(_SnapshotCommand):
    """Move an order one step forward in its lifecycle."""

    def execute(self) -> bool:
        order = self._registry.get(self.order_id)
        if order is None:
            return self._fail(CommandFailure.ORDER_NOT_FOUND)

        self._snapshot = order.status
        transition = order.advance()
        LOGGER.info("%s", transition.narration, extra={"order_id": self.order_id})
        return self._succeed()

    def describe(self) -> str:
        return f"Advance order {self.order_id}"


class CancelOrderCommand(_SnapshotCommand):
    """Cancel an order while its state still allows it."""

    def execute(self) -> bool:
        order = self._registry.get(self.order_id)
        if order is None:
            return self._fail(CommandFailure.ORDER_NOT_FOUND)
        if not order.can_cancel():
            return self._fail(CommandFailure.CANCEL_NOT_ALLOWED)

        self._snapshot = order.status
        order.cancel()
        return self._succeed()

    def describe(self) -> str:
        return f"Cancel order {self.order_id}"


class MacroCommand(Command):
    """Run several commands as one history entry.

    Children execute in order. If one fails, the children that already ran
    are undone in reverse order and the macro fails as a whole.
    """

    def __init__(self, name: str, commands: Iterable[Command]) -> None:
        super().__init__()
        self.name = name
        self.commands: tuple[Command, ...] = tuple(commands)

    def execute(self) -> bool:
        done: list[Command] = []
        for command in self.commands:
            if not command.execute():
                LOGGER.info(
                    "Macro step failed; rolling back",
                    extra={"macro": self.name, "step": command.describe()},
                )
                for applied in reversed(done):
                    applied.undo()
                return self._fail(command.last_failure or CommandFailure.MACRO_STEP_FAILED)
            done.append(command)
        return self._succeed()

    def undo(self) -> None:
        for command in reversed(self.commands):
            command.undo()

    def describe(self) -> str:
        return f"Macro: {self.name} ({len(self.commands)} steps)"
