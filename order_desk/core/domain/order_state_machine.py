"""
Order lifecycle state machine definitions.

This module defines the canonical order states, their capability flags and
the allowed transitions between them. It is intentionally pure: functions
here compute transitions from a state value and never mutate an order.

Business-rule refusals (e.g. cancelling an order that is already being
prepared) are reported through ``Transition.changed`` and must NOT raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OrderState(str, Enum):
    """Closed set of order states."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    READY = "READY"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def can_cancel(self) -> bool:
        return ORDER_STATE_CAPABILITIES[self].can_cancel

    @property
    def can_modify(self) -> bool:
        return ORDER_STATE_CAPABILITIES[self].can_modify

    @property
    def is_terminal(self) -> bool:
        return self in ORDER_TERMINAL_STATES


@dataclass(frozen=True, slots=True)
class StateCapabilities:
    """Per-state business rules, carried as data."""

    can_cancel: bool
    can_modify: bool


@dataclass(frozen=True, slots=True)
class Transition:
    """Outcome of asking the state machine to move an order."""

    prev_state: OrderState
    next_state: OrderState
    narration: str

    @property
    def changed(self) -> bool:
        return self.prev_state is not self.next_state


ORDER_STATE_CAPABILITIES: dict[OrderState, StateCapabilities] = {
    OrderState.PENDING: StateCapabilities(can_cancel=True, can_modify=True),
    OrderState.CONFIRMED: StateCapabilities(can_cancel=True, can_modify=False),
    OrderState.PREPARING: StateCapabilities(can_cancel=False, can_modify=False),
    OrderState.READY: StateCapabilities(can_cancel=False, can_modify=False),
    OrderState.IN_TRANSIT: StateCapabilities(can_cancel=False, can_modify=False),
    OrderState.DELIVERED: StateCapabilities(can_cancel=False, can_modify=False),
    OrderState.CANCELLED: StateCapabilities(can_cancel=False, can_modify=False),
}

# Terminal order states: once reached, advance() is a no-op.
ORDER_TERMINAL_STATES: frozenset[OrderState] = frozenset(
    {
        OrderState.DELIVERED,
        OrderState.CANCELLED,
    }
)


# Forward transitions driven by advance().
#
# Total over all states: terminal states map to themselves.
ORDER_ADVANCE_TRANSITIONS: dict[OrderState, OrderState] = {
    OrderState.PENDING: OrderState.CONFIRMED,
    OrderState.CONFIRMED: OrderState.PREPARING,
    OrderState.PREPARING: OrderState.READY,
    OrderState.READY: OrderState.IN_TRANSIT,
    OrderState.IN_TRANSIT: OrderState.DELIVERED,
    OrderState.DELIVERED: OrderState.DELIVERED,
    OrderState.CANCELLED: OrderState.CANCELLED,
}


_ADVANCE_NARRATION: dict[OrderState, str] = {
    OrderState.PENDING: "Order confirmed! Moving to preparation.",
    OrderState.CONFIRMED: "Kitchen started preparing the order.",
    OrderState.PREPARING: "Order is ready for pickup/delivery!",
    OrderState.READY: "Order is out for delivery!",
    OrderState.IN_TRANSIT: "Order delivered successfully!",
    OrderState.DELIVERED: "Order already delivered! No further action needed.",
    OrderState.CANCELLED: "Order was cancelled. No further processing possible.",
}


def _build_allowed_transitions() -> dict[OrderState, frozenset[OrderState]]:
    allowed: dict[OrderState, frozenset[OrderState]] = {}
    for state, nxt in ORDER_ADVANCE_TRANSITIONS.items():
        targets = {nxt}
        if state.can_cancel:
            targets.add(OrderState.CANCELLED)
        allowed[state] = frozenset(targets)
    return allowed


# Every edge reachable through advance() or cancel(), including the
# self-loops of terminal states.
ORDER_ALLOWED_TRANSITIONS: dict[OrderState, frozenset[OrderState]] = _build_allowed_transitions()


def is_terminal_state(state: OrderState) -> bool:
    """Return True if the given state is terminal."""
    return state in ORDER_TERMINAL_STATES


def is_valid_transition(prev_state: OrderState, next_state: OrderState) -> bool:
    """Return True if the transition prev_state -> next_state is allowed."""
    allowed = ORDER_ALLOWED_TRANSITIONS.get(prev_state)
    if allowed is None:
        return False
    return next_state in allowed


def advance(state: OrderState) -> Transition:
    """Compute the forward transition for ``state``."""
    return Transition(
        prev_state=state,
        next_state=ORDER_ADVANCE_TRANSITIONS[state],
        narration=_ADVANCE_NARRATION[state],
    )


def cancel(state: OrderState) -> Transition:
    """Compute the cancel transition for ``state``.

    When the state forbids cancellation the returned transition is a no-op
    (``changed`` is False) and its narration explains why.
    """
    if state.can_cancel:
        return Transition(
            prev_state=state,
            next_state=OrderState.CANCELLED,
            narration="Order cancelled.",
        )
    return Transition(
        prev_state=state,
        next_state=state,
        narration=f"Cannot cancel order in {state.value} state",
    )
