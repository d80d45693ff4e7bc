"""Command history and invoker.

The invoker owns a linear undo/redo history over executed commands:

- execute: drop any undone tail, run the command, append it on success
- undo: reverse the command at the cursor and step back
- redo: step forward and re-run ``execute()`` of that command

Redo deliberately re-executes rather than replaying a recorded effect, so
side effects such as payment charges happen again on redo.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from order_desk.core.events.events import CommandAuditEvent
from order_desk.core.events.sinks.null_event_bus import NullEventBus

if TYPE_CHECKING:
    from order_desk.core.commands.base import Command
    from order_desk.core.events.event_bus import EventBus

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandHistory:
    """Executed commands plus a cursor.

    Invariant: 0 <= position + 1 <= len(entries).
    ``position`` is the index of the last applied command, -1 when none.
    """

    entries: list[Command] = field(default_factory=list)
    position: int = -1

    def truncate(self) -> None:
        """Discard every entry beyond the cursor."""
        del self.entries[self.position + 1:]

    def can_undo(self) -> bool:
        return self.position >= 0

    def can_redo(self) -> bool:
        return self.position < len(self.entries) - 1


class CommandInvoker:
    """Executes commands and maintains their undo/redo history.

    All public operations run under one re-entrant lock: history truncation,
    order lookup and mutation happen atomically with respect to each other.
    Audit events are published after the lock is released; order events
    raised inside a command reach sinks on the calling thread, which may
    call back into the invoker.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        self._event_bus = event_bus if event_bus is not None else NullEventBus()
        self._history = CommandHistory()
        self._scheduled: deque[Command] = deque()
        self._lock = threading.RLock()

    # ---- Introspection ----
    @property
    def position(self) -> int:
        with self._lock:
            return self._history.position

    def __len__(self) -> int:
        with self._lock:
            return len(self._history.entries)

    def can_undo(self) -> bool:
        with self._lock:
            return self._history.can_undo()

    def can_redo(self) -> bool:
        with self._lock:
            return self._history.can_redo()

    def descriptions(self) -> list[str]:
        with self._lock:
            return [cmd.describe() for cmd in self._history.entries]
    # ---- History operations ----
    def execute(self, command: Command) -> bool:
        """Run ``command``; record it in history only if it succeeded."""
        with self._lock:
            ok, audit = self._execute_locked(command)
        self._event_bus.emit(audit)
        return ok

    def undo(self) -> bool:
        """Undo the most recent applied command.

        Returns False when there is nothing to undo.
        """
        with self._lock:
            history = self._history
            if not history.can_undo():
                LOGGER.info("Nothing to undo")
                return False

            command = history.entries[history.position]
            command.undo()
            history.position -= 1
            audit = self._audit("undo", command, success=True)
        self._event_bus.emit(audit)
        return True

    def redo(self) -> bool:
        """Re-execute the next undone command.

        Returns False when there is nothing to redo, or when the command no
        longer applies; in that case the cursor does not move.
        """
        with self._lock:
            history = self._history
            if not history.can_redo():
                LOGGER.info("Nothing to redo")
                return False

            command = history.entries[history.position + 1]
            ok = command.execute()
            if ok:
                history.position += 1
            audit = self._audit("redo", command, success=ok)
        self._event_bus.emit(audit)
        return ok

    # ---- Scheduling ----
    def schedule(self, command: Command) -> None:
        """Queue a command for a later ``run_scheduled()``."""
        with self._lock:
            self._scheduled.append(command)

    @property
    def scheduled_count(self) -> int:
        with self._lock:
            return len(self._scheduled)

    def run_scheduled(self) -> int:
        """Execute queued commands in FIFO order.

        Returns the number of commands that succeeded.
        """
        audits: list[CommandAuditEvent] = []
        with self._lock:
            while self._scheduled:
                command = self._scheduled.popleft()
                _, audit = self._execute_locked(command)
                audits.append(audit)

        for audit in audits:
            self._event_bus.emit(audit)
        return sum(1 for audit in audits if audit.success)

    # ---- Internals ----
    def _execute_locked(self, command: Command) -> tuple[bool, CommandAuditEvent]:
        history = self._history
        history.truncate()

        ok = command.execute()
        if ok:
            history.entries.append(command)
            history.position += 1
        return ok, self._audit("execute", command, success=ok)

    def _audit(self, action: str, command: Command, *, success: bool) -> CommandAuditEvent:
        """Log ``action`` and build its audit event; the caller publishes it."""
        description = command.describe()
        failure = None if success else command.last_failure
        LOGGER.info(
            "%s %s: %s",
            action,
            "ok" if success else "failed",
            description,
            extra={"action": action, "failure": failure},
        )
        return CommandAuditEvent(
            action=action,
            description=description,
            success=success,
            position=self._history.position,
            history_size=len(self._history.entries),
            failure=failure,
        )
