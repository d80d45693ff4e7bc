"""
Semantic test: notification fan-out is fire-and-forget.

Invariant:
A sink that raises never aborts the triggering operation; the failure is
logged and the remaining sinks still receive the event.
"""

from __future__ import annotations

import logging

from order_desk.core.commands.invoker import CommandInvoker
from order_desk.core.commands.order_commands import AdvanceOrderCommand, PlaceOrderCommand
from order_desk.core.commands.registry import OrderRegistry
from order_desk.core.domain.order import OrderBuilder
from order_desk.core.domain.order_state_machine import OrderState
from order_desk.core.events.event_bus import EventBus
from order_desk.core.events.event_sink import NotificationSink
from order_desk.core.events.events import OrderStatusChangedEvent


class ExplodingSink:
    def on_event(self, event) -> None:
        raise RuntimeError("sms provider down")


class CollectingNotifications(NotificationSink):
    def __init__(self) -> None:
        self.placed: list[str] = []
        self.changes: list[tuple[str, str]] = []
        self.cancelled: list[str] = []
        self.payments: list[bool] = []

    def on_order_placed(self, event) -> None:
        self.placed.append(event.order_id)

    def on_status_changed(self, event) -> None:
        self.changes.append((event.prev_state, event.next_state))

    def on_order_cancelled(self, event) -> None:
        self.cancelled.append(event.order_id)

    def on_payment_processed(self, event) -> None:
        self.payments.append(event.success)


def test_failing_sink_does_not_abort_commands(margherita, make_gateway, recording_sink, caplog) -> None:
    bus = EventBus([ExplodingSink(), recording_sink])
    registry = OrderRegistry()
    invoker = CommandInvoker(event_bus=bus)
    order = OrderBuilder("Alice", event_bus=bus).add_item(margherita, 1).build()

    with caplog.at_level(logging.ERROR, logger="order_desk.core.events.event_bus"):
        assert invoker.execute(PlaceOrderCommand(order, registry, make_gateway(), bus))
        assert invoker.execute(AdvanceOrderCommand(order.order_id, registry))

    assert order.status is OrderState.CONFIRMED
    assert recording_sink.of_type(OrderStatusChangedEvent)
    assert any("Event sink failed" in r.getMessage() for r in caplog.records)


def test_notification_sink_routes_hooks(margherita, make_gateway) -> None:
    notifications = CollectingNotifications()
    bus = EventBus([notifications])
    registry = OrderRegistry()
    invoker = CommandInvoker(event_bus=bus)
    order = OrderBuilder("Alice", event_bus=bus).add_item(margherita, 1).build()

    invoker.execute(PlaceOrderCommand(order, registry, make_gateway(), bus))
    order.cancel()

    assert notifications.payments == [True]
    assert notifications.placed == [order.order_id]
    assert notifications.changes == [("PENDING", "CANCELLED")]
    assert notifications.cancelled == [order.order_id]


def test_unregister_and_close() -> None:
    closed: list[bool] = []

    class ClosingSink:
        def on_event(self, event) -> None:
            return

        def close(self) -> None:
            closed.append(True)

    sink = ClosingSink()
    bus = EventBus([sink])
    bus.close()
    bus.close()
    assert closed == [True]

    bus.unregister(sink)
    bus.unregister(sink)
    assert bus.sinks == ()
