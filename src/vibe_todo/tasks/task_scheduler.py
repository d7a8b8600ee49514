# src/vibe_todo/tasks/task_scheduler.py

from __future__ import annotations

"""
Deadline scheduler.

A single periodic poll (default every 60s) that:
- scans all open, dated tasks,
- fires a "reminder" once when a deadline enters the reminder window,
- fires a "due" notification once when the deadline passes,
- saves the collection once per tick if any flag changed,
- always refreshes the view so countdowns stay current.

Precision is bounded by the tick interval; there is no timer per task.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from ..core.ports import PeriodicTimer, TimerHandle
from ..core.state import WidgetState
from .task_api import persist, refresh
from .task_models import TaskRecord

logger = logging.getLogger(__name__)

DUE_TITLE = "⚠️ Task Deadline!"
REMINDER_TITLE = "⏰ Task Reminder"


class NotificationKind(str, Enum):
    DUE = "due"
    REMINDER = "reminder"


@dataclass(slots=True, frozen=True)
class Notification:
    task: TaskRecord
    kind: NotificationKind
    title: str
    body: str


def _window_label(window: timedelta) -> str:
    minutes = int(window.total_seconds() // 60)
    return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"


def build_notification(task: TaskRecord, kind: NotificationKind, window: timedelta) -> Notification:
    if kind == NotificationKind.DUE:
        return Notification(task, kind, DUE_TITLE, f'"{task.text}" is now due!')
    return Notification(task, kind, REMINDER_TITLE, f'"{task.text}" is due in {_window_label(window)}!')


def check_task(task: TaskRecord, now: datetime, window: timedelta) -> NotificationKind | None:
    """
    Decide which transition (if any) a task makes at `now`.

    Completed, undated and already-notified tasks never fire.
    """
    if task.deadline is None or task.completed or task.notified:
        return None

    remaining = task.deadline - now
    if remaining <= timedelta(0):
        return NotificationKind.DUE
    if remaining <= window and not task.reminded:
        return NotificationKind.REMINDER
    return None


class DeadlineScheduler:
    def __init__(self, state: WidgetState) -> None:
        self._state = state
        self._handle: TimerHandle | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def scan(self, now: datetime | None = None) -> list[Notification]:
        """
        Fire due/reminder notifications and set the matching flags.

        Does not persist; tick() saves once after the whole scan.
        """
        state = self._state
        if now is None:
            now = state.now()

        fired: list[Notification] = []
        for task in state.tasks:
            kind = check_task(task, now, state.reminder_window)
            if kind is None:
                continue

            note = build_notification(task, kind, state.reminder_window)
            try:
                state.notifier.notify(note.title, note.body)
            except Exception:
                # Delivery is best-effort; the flag is still set so we never spam.
                logger.exception("Notifier failed task_id=%s kind=%s", task.task_id, kind.value)

            if kind == NotificationKind.DUE:
                task.notified = True
            else:
                task.reminded = True
            fired.append(note)
            logger.info("Task %s -> %s", task.task_id, task.phase.value)

        return fired

    def tick(self) -> bool:
        """Timer callback. Always returns True (keep running)."""
        state = self._state
        try:
            fired = self.scan()
            if fired or state.save_pending:
                persist(state)
        except Exception:
            logger.exception("Deadline scan failed")

        refresh(state)
        return True

    def start(self, timer: PeriodicTimer, interval_seconds: float = 60.0) -> None:
        if self._handle is not None:
            return
        interval_ms = int(max(1.0, float(interval_seconds)) * 1000)
        self._handle = timer.schedule_periodic(interval_ms, self.tick)
        logger.info("Deadline scheduler started interval=%.0fs", interval_ms / 1000)

    def stop(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        logger.info("Deadline scheduler stopped")
