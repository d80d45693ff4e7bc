"""
Domain event models.

These events represent immutable facts observed while orders move through
their lifecycle. They are consumed by notification sinks, loggers and
recorders. Amounts are carried as strings to keep Decimal precision when
serialized.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field


def _now_ns() -> int:
    return time.time_ns()


@dataclass(slots=True)
class OrderPlacedEvent:
    order_id: str
    customer_name: str
    total_value: str
    item_count: int
    ts_ns: int = field(default_factory=_now_ns)


@dataclass(slots=True)
class OrderStatusChangedEvent:
    order_id: str
    prev_state: str
    next_state: str

    # advance | cancel | restore
    reason: str
    narration: str = ""
    ts_ns: int = field(default_factory=_now_ns)


@dataclass(slots=True)
class OrderCancelledEvent:
    order_id: str
    prev_state: str
    ts_ns: int = field(default_factory=_now_ns)


@dataclass(slots=True)
class PaymentProcessedEvent:
    order_id: str
    amount: str

    success: bool
    transaction_id: str
    method: str
    message: str
    ts_ns: int = field(default_factory=_now_ns)


@dataclass(slots=True)
class CommandAuditEvent:
    # execute | undo | redo
    action: str
    description: str
    success: bool

    position: int
    history_size: int

    failure: str | None = None
    ts_ns: int = field(default_factory=_now_ns)
