"""
Semantic test: new commands discard the redo tail.

Invariant:
Immediately after any successful execute, len(history) == position + 1.
A failed execute leaves the history length and cursor unchanged apart
from the truncation of the undone tail.
"""

from __future__ import annotations

from order_desk.core.commands.invoker import CommandInvoker
from order_desk.core.commands.order_commands import AdvanceOrderCommand, CancelOrderCommand
from order_desk.core.commands.registry import OrderRegistry
from order_desk.core.domain.order import OrderBuilder
from order_desk.core.domain.order_state_machine import OrderState


def test_execute_after_undo_discards_tail(margherita) -> None:
    registry = OrderRegistry()
    invoker = CommandInvoker()
    order = OrderBuilder("Alice").add_item(margherita, 1).build()
    registry.add(order)

    for _ in range(3):
        invoker.execute(AdvanceOrderCommand(order.order_id, registry))
    invoker.undo()
    invoker.undo()
    assert len(invoker) == 3
    assert invoker.position == 0

    assert invoker.execute(CancelOrderCommand(order.order_id, registry)) is True

    assert len(invoker) == invoker.position + 1 == 2
    assert invoker.redo() is False
    assert order.status is OrderState.CANCELLED
    assert invoker.descriptions() == [
        f"Advance order {order.order_id}",
        f"Cancel order {order.order_id}",
    ]


def test_history_invariant_holds_after_each_execute(margherita) -> None:
    registry = OrderRegistry()
    invoker = CommandInvoker()
    order = OrderBuilder("Alice").add_item(margherita, 1).build()
    registry.add(order)

    for step in range(6):
        invoker.execute(AdvanceOrderCommand(order.order_id, registry))
        assert len(invoker) == invoker.position + 1
        if step % 2 == 1:
            invoker.undo()
            assert 0 <= invoker.position + 1 <= len(invoker)


def test_failed_execute_does_not_advance_cursor(margherita) -> None:
    registry = OrderRegistry()
    invoker = CommandInvoker()
    order = OrderBuilder("Alice").add_item(margherita, 1).build()
    registry.add(order)
    invoker.execute(AdvanceOrderCommand(order.order_id, registry))

    assert invoker.execute(AdvanceOrderCommand("missing", registry)) is False

    assert invoker.position == 0
    assert len(invoker) == 1
