from __future__ import annotations

from order_desk.core.events.event_bus import EventBus


class NullEventBus(EventBus):
    """EventBus without sinks; orders built without a bus publish here."""

    def __init__(self) -> None:
        super().__init__(sinks=[])
