"""Public API for the order_desk package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Adapters & config
# ----------------------------------------------------------------------
from order_desk.adapters.menu import InMemoryCustomerDirectory, InMemoryMenu
from order_desk.adapters.payment import SimulatedPaymentGateway
from order_desk.config.restaurant_config import PaymentSimulationConfig, RestaurantConfig

# ----------------------------------------------------------------------
# Commands & history
# ----------------------------------------------------------------------
from order_desk.core.commands.base import Command
from order_desk.core.commands.invoker import CommandHistory, CommandInvoker
from order_desk.core.commands.order_commands import (
    AdvanceOrderCommand,
    CancelOrderCommand,
    MacroCommand,
    PlaceOrderCommand,
)
from order_desk.core.commands.registry import OrderRegistry

# ----------------------------------------------------------------------
# Domain
# ----------------------------------------------------------------------
from order_desk.core.domain.errors import ConfigError, OrderValidationError, PaymentGatewayError
from order_desk.core.domain.failure_reasons import CommandFailure
from order_desk.core.domain.order import Order, OrderBuilder, build_order
from order_desk.core.domain.order_state_machine import OrderState, Transition
from order_desk.core.domain.types import CustomerInfo, LineItem, MenuItem, PaymentOutcome

# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------
from order_desk.core.events.event_bus import EventBus
from order_desk.core.events.event_sink import EventSink, NotificationSink
from order_desk.core.ports.catalog import CustomerDirectory, MenuCatalog
from order_desk.core.ports.payment_gateway import PaymentGateway
from order_desk.restaurant import Restaurant

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Session
    "Restaurant",

    # Config
    "RestaurantConfig",
    "PaymentSimulationConfig",

    # Domain
    "Order",
    "OrderBuilder",
    "build_order",
    "OrderState",
    "Transition",
    "MenuItem",
    "LineItem",
    "CustomerInfo",
    "PaymentOutcome",

    # Errors
    "OrderValidationError",
    "PaymentGatewayError",
    "ConfigError",
    "CommandFailure",

    # Commands
    "Command",
    "PlaceOrderCommand",
    "AdvanceOrderCommand",
    "CancelOrderCommand",
    "MacroCommand",
    "CommandHistory",
    "CommandInvoker",
    "OrderRegistry",

    # Events & ports
    "EventBus",
    "EventSink",
    "NotificationSink",
    "PaymentGateway",
    "MenuCatalog",
    "CustomerDirectory",

    # Adapters
    "InMemoryMenu",
    "InMemoryCustomerDirectory",
    "SimulatedPaymentGateway",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("order-desk")
except PackageNotFoundError:
    __version__ = "0.0.0"
