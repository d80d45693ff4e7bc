"""Restaurant session: one order registry and command history per instance.

``Restaurant`` wires the catalog, payment gateway, event bus, registry and
invoker together and exposes the order workflow as command submissions.
Nothing is process-global; two restaurants never share orders or history.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from order_desk.adapters.menu import InMemoryCustomerDirectory, InMemoryMenu
from order_desk.adapters.payment import SimulatedPaymentGateway
from order_desk.core.commands.invoker import CommandInvoker
from order_desk.core.commands.order_commands import (
    AdvanceOrderCommand,
    CancelOrderCommand,
    PlaceOrderCommand,
)
from order_desk.core.commands.registry import OrderRegistry
from order_desk.core.domain.order import OrderBuilder
from order_desk.core.domain.order_ids import OrderIdGenerator
from order_desk.core.events.event_bus import EventBus
from order_desk.core.events.sinks.file_recorder import FileRecorderSink
from order_desk.core.events.sinks.sink_logging import LoggingEventSink

if TYPE_CHECKING:
    from order_desk.config.restaurant_config import RestaurantConfig
    from order_desk.core.commands.base import Command
    from order_desk.core.domain.order import Order
    from order_desk.core.domain.types import MenuItem
    from order_desk.core.events.event_sink import EventSink
    from order_desk.core.ports.catalog import CustomerDirectory
    from order_desk.core.ports.payment_gateway import PaymentGateway


class Restaurant:
    """Order workflow entry point for one tenant."""

    def __init__(
        self,
        config: RestaurantConfig,
        *,
        payment_gateway: PaymentGateway | None = None,
        customers: CustomerDirectory | None = None,
        sinks: Iterable[EventSink] | None = None,
    ) -> None:
        self.config = config
        self.menu = InMemoryMenu.from_config(config)
        self.customers = customers if customers is not None else InMemoryCustomerDirectory()

        self.event_bus = self._build_event_bus(config, sinks)
        self.registry = OrderRegistry()
        self.invoker = CommandInvoker(event_bus=self.event_bus)

        self._id_factory = OrderIdGenerator(namespace=config.name)
        # order_id -> customer name, only while that order is being charged
        self._charging: dict[str, str] = {}

        if payment_gateway is None:
            payment_gateway = SimulatedPaymentGateway(
                config.payment,
                customer_lookup=self._charging.get,
            )
        self.payment_gateway = payment_gateway

    @staticmethod
    def _build_event_bus(
        config: RestaurantConfig,
        sinks: Iterable[EventSink] | None,
    ) -> EventBus:
        logger = logging.getLogger("order_desk.bus")

        all_sinks: list[EventSink] = [LoggingEventSink(logger)]
        if config.event_log_path:
            all_sinks.append(FileRecorderSink(Path(config.event_log_path)))
        if sinks is not None:
            all_sinks.extend(sinks)

        return EventBus(sinks=all_sinks)

    # ---- Building ----
    def order_builder(self, customer_name: str = "", customer_phone: str = "") -> OrderBuilder:
        """Start an order, filling customer details from the directory.

        A phone number registered in ``customers`` supplies the name when
        none is given, and the email on file.
        """
        known = self.customers.get_customer(customer_phone) if customer_phone else None
        if known is not None and not customer_name.strip():
            customer_name = known.name

        builder = OrderBuilder(
            customer_name,
            customer_phone,
            event_bus=self.event_bus,
            id_factory=self._id_factory,
        )
        if known is not None and known.email:
            builder.set_email(known.email)
        return builder

    def find_menu_item(self, category: str, index: int) -> MenuItem | None:
        return self.menu.find_item(category, index)

    # ---- Workflow ----
    def submit(self, command: Command) -> bool:
        return self.invoker.execute(command)

    def place_order(self, order: Order) -> bool:
        return self.submit(
            _CustomerScopedPlaceOrder(
                order,
                self.registry,
                self.payment_gateway,
                self.event_bus,
                payment_method=self.config.payment.method,
                charging=self._charging,
            )
        )

    def advance_order(self, order_id: str) -> bool:
        return self.submit(AdvanceOrderCommand(order_id, self.registry))

    def cancel_order(self, order_id: str) -> bool:
        return self.submit(CancelOrderCommand(order_id, self.registry))

    def undo(self) -> bool:
        return self.invoker.undo()

    def redo(self) -> bool:
        return self.invoker.redo()

    def get_order(self, order_id: str) -> Order | None:
        return self.registry.get(order_id)

    def close(self) -> None:
        self.event_bus.close()


class _CustomerScopedPlaceOrder(PlaceOrderCommand):
    """PlaceOrderCommand that names the order's customer to the gateway while charging.

    The entry lives only for the duration of ``execute()``, including a
    re-execution on redo.
    """

    def __init__(
        self,
        order: Order,
        registry: OrderRegistry,
        payment_gateway: PaymentGateway,
        event_bus: EventBus,
        *,
        payment_method: str,
        charging: dict[str, str],
    ) -> None:
        super().__init__(order, registry, payment_gateway, event_bus, payment_method=payment_method)
        self._charging = charging

    def execute(self) -> bool:
        order_id = self.order.order_id
        self._charging[order_id] = self.order.customer.name
        try:
            return super().execute()
        finally:
            self._charging.pop(order_id, None)
