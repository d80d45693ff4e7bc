from __future__ import annotations

import json
import logging
import os
from typing import Any

from prometheus_client import CollectorRegistry, Gauge, push_to_gateway

LOGGER = logging.getLogger(__name__)


class PrometheusMetricsClient:
    """Prometheus Pushgateway client for scenario runs.

    Expected environment:
    - PROMETHEUS_PUSHGATEWAY_URL: URL to the Pushgateway.

    Optional:
    - PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON: JSON object of string labels
      used as grouping key, e.g. {"restaurant": "demo-kitchen"}.

    Metrics delivery is a side effect: callers catch and log failures.
    """

    def __init__(self, *, url: str | None = None) -> None:
        self._pushgateway_url = url if url is not None else os.environ.get("PROMETHEUS_PUSHGATEWAY_URL")
        self._grouping_key = self._load_grouping_key()
        self._registry = CollectorRegistry()

    def is_enabled(self) -> bool:
        return bool(self._pushgateway_url)

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    @staticmethod
    def _load_grouping_key() -> dict[str, str]:
        raw = os.environ.get("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON")
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning("Invalid PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON; ignoring")
            return {}

        if not isinstance(data, dict):
            return {}

        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def record_run_summary(self, summary: dict[str, Any], *, restaurant: str) -> None:
        """Register gauges describing a finished scenario run."""
        labels = {"restaurant": restaurant}
        steps = summary.get("steps", [])
        orders = summary.get("orders", [])

        values = {
            "order_desk_steps_total": float(len(steps)),
            "order_desk_steps_failed": float(sum(1 for s in steps if not s.get("ok"))),
            "order_desk_orders_registered": float(sum(1 for o in orders if o.get("registered"))),
            "order_desk_history_size": float(summary.get("history", {}).get("size", 0)),
        }
        for name, value in values.items():
            gauge = Gauge(
                name,
                documentation=name,
                labelnames=list(labels.keys()),
                registry=self._registry,
            )
            gauge.labels(**labels).set(value)

    def push_all(self, *, job: str) -> None:
        if not self._pushgateway_url:
            return

        push_to_gateway(
            gateway=self._pushgateway_url,
            job=job,
            registry=self._registry,
            grouping_key=self._grouping_key,
        )

        LOGGER.info(
            "Prometheus metrics pushed",
            extra={"job": job, "grouping_key": self._grouping_key},
        )
