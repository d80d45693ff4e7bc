"""
Semantic test: event recorders.

Invariant:
FileRecorderSink appends one JSON object per event, tagged with its event
type; LoggingEventSink logs each event at the configured level.
"""

from __future__ import annotations

import json
import logging

from order_desk.core.events.events import OrderCancelledEvent, OrderStatusChangedEvent
from order_desk.core.events.sinks.file_recorder import FileRecorderSink
from order_desk.core.events.sinks.sink_logging import LoggingEventSink


def test_file_recorder_writes_json_lines(tmp_path) -> None:
    path = tmp_path / "events" / "log.jsonl"
    sink = FileRecorderSink(path)

    sink.on_event(
        OrderStatusChangedEvent(order_id="o1", prev_state="PENDING", next_state="CONFIRMED", reason="advance")
    )
    sink.on_event(OrderCancelledEvent(order_id="o1", prev_state="CONFIRMED"))
    sink.close()
    sink.on_event(OrderCancelledEvent(order_id="o2", prev_state="PENDING"))

    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [r["event_type"] for r in records] == ["OrderStatusChangedEvent", "OrderCancelledEvent"]
    assert records[0]["next_state"] == "CONFIRMED"
    assert isinstance(records[0]["ts_ns"], int)


def test_logging_sink_logs_events(caplog) -> None:
    logger = logging.getLogger("test.bus")
    sink = LoggingEventSink(logger)

    with caplog.at_level(logging.INFO, logger="test.bus"):
        sink.on_event(OrderCancelledEvent(order_id="o1", prev_state="PENDING"))

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert "OrderCancelledEvent" in record.getMessage()
    assert record.event["order_id"] == "o1"
