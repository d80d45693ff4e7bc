"""Scenario runner.

Replays a JSON scenario of order steps against a fresh ``Restaurant`` and
prints a JSON summary of the outcome:

    python -m order_desk.runtime.entrypoint --config cfg.json --scenario s.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jsonschema import Draft202012Validator
from jsonschema import ValidationError as JsonSchemaValidationError

from order_desk.config.restaurant_config import RestaurantConfig
from order_desk.core.domain.errors import ConfigError, OrderValidationError
from order_desk.restaurant import Restaurant
from order_desk.runtime.metrics import PrometheusMetricsClient

if TYPE_CHECKING:
    from order_desk.core.domain.order import Order

LOGGER = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "core" / "schemas"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(path)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path} is not valid JSON: {exc}") from exc


def validate_scenario(scenario: Any) -> None:
    """Validate a scenario document against scenario.schema.json."""
    schema = json.loads((SCHEMA_DIR / "scenario.schema.json").read_text(encoding="utf-8"))
    try:
        Draft202012Validator(schema).validate(scenario)
    except JsonSchemaValidationError as exc:
        raise ConfigError(f"Invalid scenario: {exc.message}") from exc


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


class ScenarioRunner:
    """Applies scenario steps to one restaurant session.

    Orders are addressed by the scenario's ``ref`` names. A ref that was
    never placed is passed through verbatim as an order id, so it resolves
    to nothing in the registry.
    """

    def __init__(self, restaurant: Restaurant) -> None:
        self.restaurant = restaurant
        self._orders: dict[str, Order] = {}

    def run(self, scenario: dict[str, Any]) -> dict[str, Any]:
        validate_scenario(scenario)

        steps: list[dict[str, Any]] = []
        for index, step in enumerate(scenario["steps"]):
            result: dict[str, Any] = {"index": index, "op": step["op"]}
            if "ref" in step:
                result["ref"] = step["ref"]

            try:
                result["ok"] = self._apply(step)
            except OrderValidationError as exc:
                LOGGER.warning("Order rejected at build time", extra={"step": index, "error": str(exc)})
                result["ok"] = False
                result["error"] = str(exc)

            steps.append(result)

        return {
            "restaurant": self.restaurant.config.name,
            "steps": steps,
            "orders": self._order_summaries(),
            "history": {
                "position": self.restaurant.invoker.position,
                "size": len(self.restaurant.invoker),
                "descriptions": self.restaurant.invoker.descriptions(),
            },
        }

    def _apply(self, step: dict[str, Any]) -> bool:
        op = step["op"]
        if op == "place":
            return self._place(step)
        if op == "advance":
            return self.restaurant.advance_order(self._resolve(step["ref"]))
        if op == "cancel":
            return self.restaurant.cancel_order(self._resolve(step["ref"]))
        if op == "undo":
            return self.restaurant.undo()
        if op == "redo":
            return self.restaurant.redo()
        raise ConfigError(f"Unknown scenario op: {op}")

    def _place(self, step: dict[str, Any]) -> bool:
        customer = step["customer"]
        builder = self.restaurant.order_builder(customer["name"], customer.get("phone", ""))
        if customer.get("email"):
            builder.set_email(customer["email"])
        if step.get("delivery_address"):
            builder.set_delivery_address(step["delivery_address"])
        if step.get("special_instructions"):
            builder.set_special_instructions(step["special_instructions"])

        for item in step["items"]:
            menu_item = self.restaurant.find_menu_item(item["category"], item["index"])
            if menu_item is None:
                raise OrderValidationError(
                    f"No menu item #{item['index']} in category {item['category']!r}"
                )
            builder.add_item(menu_item, item.get("quantity", 1), item.get("customizations", ()))

        order = builder.build()
        self._orders[step["ref"]] = order
        return self.restaurant.place_order(order)

    def _resolve(self, ref: str) -> str:
        order = self._orders.get(ref)
        return ref if order is None else order.order_id

    def _order_summaries(self) -> list[dict[str, Any]]:
        summaries = []
        for ref, order in self._orders.items():
            outcome = order.payment_outcome
            summaries.append(
                {
                    "ref": ref,
                    "order_id": order.order_id,
                    "status": order.status.value,
                    "registered": order.order_id in self.restaurant.registry,
                    "total_value": str(order.total_value()),
                    "payment": None if outcome is None else outcome.model_dump(mode="json"),
                }
            )
        return summaries


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay an order scenario")
    parser.add_argument("--config", type=Path, required=True, help="Restaurant config JSON")
    parser.add_argument("--scenario", type=Path, required=True, help="Scenario JSON")
    parser.add_argument("--events-out", type=Path, default=None, help="Append domain events here (JSON lines)")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), stream=sys.stderr)

    config = RestaurantConfig.from_path(args.config)
    if args.events_out is not None:
        config = config.model_copy(update={"event_log_path": str(args.events_out)})

    scenario = _load_json(args.scenario)

    restaurant = Restaurant(config)
    try:
        summary = ScenarioRunner(restaurant).run(scenario)
    finally:
        restaurant.close()

    print(json.dumps(summary, indent=2))

    # --- Prometheus metrics (side-effect only) ---
    metrics = PrometheusMetricsClient()
    if metrics.is_enabled():
        try:
            metrics.record_run_summary(summary, restaurant=config.name)
            metrics.push_all(job="order_desk_scenario")
        except Exception:  # pylint: disable=broad-exception-caught
            LOGGER.exception("Prometheus push failed")

    return 0


if __name__ == "__main__":
    sys.exit(main())
