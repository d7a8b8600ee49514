# src/vibe_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task engine depends on Protocols instead of the host's concrete services
(notification daemon, main-loop timers, menu widgets). This keeps the host
swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..tasks.task_presenter import TaskRow

Clock = Callable[[], datetime]
# Returns an aware "now"; injected so tests can freeze time.

TimerCallback = Callable[[], bool]
# Periodic callback; returning True means "keep running".


class Notifier(Protocol):
    """Fire-and-forget user notification (desktop bubble, chat message, ...)."""

    def notify(self, title: str, body: str) -> None: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class PeriodicTimer(Protocol):
    """Host timer facility (GLib.timeout_add-style)."""

    def schedule_periodic(self, interval_ms: int, callback: TimerCallback) -> TimerHandle: ...


class TaskRenderer(Protocol):
    """
    UI sink: receives presenter rows in display order.

    Rows carry stable task ids; any affordance wired to a row must address
    the task by that id, never by a position captured earlier.
    """

    def __call__(self, rows: Sequence[TaskRow]) -> Any: ...
