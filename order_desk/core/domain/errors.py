"""Exception types raised by the order core.

Only construction-time validation is exceptional. Business-rule refusals,
unknown order ids and declined payments are reported as results; see
``failure_reasons.CommandFailure``.
"""

from __future__ import annotations


class OrderValidationError(ValueError):
    """An order could not be built from the supplied items and customer."""


class PaymentGatewayError(RuntimeError):
    """A payment gateway could not complete a charge request."""


class ConfigError(ValueError):
    """A configuration or scenario document is invalid."""
