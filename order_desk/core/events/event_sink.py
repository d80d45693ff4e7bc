"""
Event sink interface.

Sinks consume domain events emitted by orders, commands and the invoker.
``NotificationSink`` is a convenience base that routes the order lifecycle
events to one hook per fact.
"""
from __future__ import annotations

from typing import Any, Protocol

from order_desk.core.events.events import (
    OrderCancelledEvent,
    OrderPlacedEvent,
    OrderStatusChangedEvent,
    PaymentProcessedEvent,
)


class EventSink(Protocol):
    def on_event(self, event: Any) -> None:
        """Consume a domain event."""


class NotificationSink:
    """Base class for notification channels (email, SMS, push, analytics).

    Subclasses override the hooks they care about. Events without a
    dedicated hook are ignored.
    """

    def on_event(self, event: Any) -> None:
        if isinstance(event, OrderPlacedEvent):
            self.on_order_placed(event)
        elif isinstance(event, OrderStatusChangedEvent):
            self.on_status_changed(event)
        elif isinstance(event, OrderCancelledEvent):
            self.on_order_cancelled(event)
        elif isinstance(event, PaymentProcessedEvent):
            self.on_payment_processed(event)

    def on_order_placed(self, event: OrderPlacedEvent) -> None:
        return

    def on_status_changed(self, event: OrderStatusChangedEvent) -> None:
        return

    def on_order_cancelled(self, event: OrderCancelledEvent) -> None:
        return

    def on_payment_processed(self, event: PaymentProcessedEvent) -> None:
        return
