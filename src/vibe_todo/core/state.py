# src/vibe_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from ..tasks.task_collection import TaskCollection
from ..tasks.task_store import TaskStore
from .ports import Clock, Notifier, TaskRenderer


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class WidgetState:
    """
    Everything one widget instance owns.

    Created on enable(), dropped on disable(); nothing lives at module level.
    """

    # Store Settings on the state for easy access in commands.
    settings: object

    store: TaskStore
    notifier: Notifier
    tasks: TaskCollection = field(default_factory=TaskCollection)
    renderer: TaskRenderer | None = None
    clock: Clock = utc_now

    reminder_window: timedelta = timedelta(minutes=10)

    # True while the last save failed; the next mutation or tick retries.
    save_pending: bool = False

    def now(self) -> datetime:
        return self.clock()
