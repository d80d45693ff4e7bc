"""
Semantic test: sinks calling back into the invoker.

Invariant:
A sink may query or drive the invoker from inside its callback. Neither a
read on an audit event nor a follow-up command submitted from a status
change hook blocks the command that triggered it.
"""

from __future__ import annotations

import threading
from typing import Any

from order_desk.core.commands.invoker import CommandInvoker
from order_desk.core.commands.order_commands import AdvanceOrderCommand
from order_desk.core.commands.registry import OrderRegistry
from order_desk.core.domain.order import OrderBuilder
from order_desk.core.domain.order_state_machine import OrderState
from order_desk.core.events.event_bus import EventBus
from order_desk.core.events.event_sink import NotificationSink
from order_desk.core.events.events import CommandAuditEvent, OrderStatusChangedEvent


class HistoryReadingSink:
    def __init__(self) -> None:
        self.invoker: CommandInvoker | None = None
        self.seen: list[tuple[bool, int, list[str]]] = []

    def on_event(self, event: Any) -> None:
        if isinstance(event, CommandAuditEvent) and self.invoker is not None:
            self.seen.append((self.invoker.can_undo(), self.invoker.position, self.invoker.descriptions()))


class AutoConfirmSink(NotificationSink):
    """Submits an advance as soon as an order reaches CONFIRMED."""

    def __init__(self, registry: OrderRegistry) -> None:
        self.registry = registry
        self.invoker: CommandInvoker | None = None

    def on_status_changed(self, event: OrderStatusChangedEvent) -> None:
        if self.invoker is not None and event.next_state == OrderState.CONFIRMED.value and event.reason == "advance":
            self.invoker.execute(AdvanceOrderCommand(event.order_id, self.registry))


def _run_with_timeout(target, timeout: float = 3.0) -> None:
    worker = threading.Thread(target=target, daemon=True)
    worker.start()
    worker.join(timeout=timeout)
    assert not worker.is_alive(), "invoker call did not return"


def test_sink_can_read_history_from_audit_event(margherita) -> None:
    sink = HistoryReadingSink()
    bus = EventBus([sink])
    registry = OrderRegistry()
    invoker = CommandInvoker(event_bus=bus)
    sink.invoker = invoker
    order = OrderBuilder("Alice", event_bus=bus).add_item(margherita, 1).build()
    registry.add(order)

    results: list[bool] = []
    _run_with_timeout(lambda: results.append(invoker.execute(AdvanceOrderCommand(order.order_id, registry))))
    _run_with_timeout(lambda: results.append(invoker.undo()))
    _run_with_timeout(lambda: results.append(invoker.redo()))

    assert results == [True, True, True]
    assert [(can_undo, position) for can_undo, position, _ in sink.seen] == [(True, 0), (False, -1), (True, 0)]
    assert sink.seen[0][2] == [f"Advance order {order.order_id}"]


def test_status_hook_can_submit_follow_up_command(margherita) -> None:
    registry = OrderRegistry()
    sink = AutoConfirmSink(registry)
    bus = EventBus([sink])
    invoker = CommandInvoker(event_bus=bus)
    sink.invoker = invoker
    order = OrderBuilder("Alice", event_bus=bus).add_item(margherita, 1).build()
    registry.add(order)

    results: list[bool] = []
    _run_with_timeout(lambda: results.append(invoker.execute(AdvanceOrderCommand(order.order_id, registry))))

    assert results == [True]
    assert order.status is OrderState.PREPARING
    assert len(invoker) == 2


def test_queue_and_cursor_readable_during_scheduled_run(margherita) -> None:
    registry = OrderRegistry()
    invoker = CommandInvoker()
    seen: list[tuple[int, int]] = []

    class QueueReadingSink(NotificationSink):
        def on_status_changed(self, event: OrderStatusChangedEvent) -> None:
            seen.append((invoker.scheduled_count, invoker.position))

    order = OrderBuilder("Alice", event_bus=EventBus([QueueReadingSink()])).add_item(margherita, 1).build()
    registry.add(order)
    invoker.schedule(AdvanceOrderCommand(order.order_id, registry))
    invoker.schedule(AdvanceOrderCommand(order.order_id, registry))

    results: list[int] = []
    _run_with_timeout(lambda: results.append(invoker.run_scheduled()))

    assert results == [2]
    assert seen == [(1, -1), (0, 0)]
