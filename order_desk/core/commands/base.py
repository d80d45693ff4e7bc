"""Base command interface.

This module defines the reversible command contract driven by
``CommandInvoker``. Concrete commands wrap exactly one order mutation and
capture whatever they need to reverse it when ``execute()`` runs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Command(ABC):
    """Reversible mutation.

    ``execute()`` returns True when the mutation applied and False for a
    normal refusal (unknown order, business rule, declined payment). In the
    latter case ``last_failure`` holds a ``CommandFailure`` code.

    Redo re-runs ``execute()``, so execute must be safe to call again after
    ``undo()``.
    """

    def __init__(self) -> None:
        self.last_failure: str | None = None

    @abstractmethod
    def execute(self) -> bool:
        """Apply the mutation and report whether it took effect."""

    @abstractmethod
    def undo(self) -> None:
        """Reverse the last successful ``execute()``."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable description used for the audit log."""

    def _fail(self, reason: str) -> bool:
        self.last_failure = reason
        return False

    def _succeed(self) -> bool:
        self.last_failure = None
        return True

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self.describe()}>"
