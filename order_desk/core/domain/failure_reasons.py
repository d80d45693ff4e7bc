"""Canonical failure reason codes for commands that did not apply."""

from __future__ import annotations


class CommandFailure:
    """String constants recorded on ``Command.last_failure``."""

    ORDER_NOT_FOUND = "order_not_found"
    CANCEL_NOT_ALLOWED = "cancel_not_allowed"
    PAYMENT_DECLINED = "payment_declined"
    PAYMENT_GATEWAY_ERROR = "payment_gateway_error"
    ALREADY_REGISTERED = "already_registered"
    MACRO_STEP_FAILED = "macro_step_failed"
