# src/vibe_todo/core/widget.py

"""
Widget lifecycle.

The host calls enable() / disable(). enable() loads the task file, builds a
fresh WidgetState, renders once and starts the periodic deadline check.
disable() cancels the check and drops the state without saving: whatever
the last successful command or tick wrote is what survives.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from ..tasks.task_api import refresh
from ..tasks.task_collection import TaskCollection
from ..tasks.task_commands import TaskCommandHandler
from ..tasks.task_scheduler import DeadlineScheduler
from ..tasks.task_store import StoreErrorKind, TaskStore
from .ports import Clock, Notifier, PeriodicTimer, TaskRenderer
from .state import WidgetState, utc_now

logger = logging.getLogger(__name__)


class VibeWidget:
    def __init__(
        self,
        *,
        settings,
        store: TaskStore,
        notifier: Notifier,
        timer: PeriodicTimer,
        renderer: TaskRenderer | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._settings = settings
        self._store = store
        self._notifier = notifier
        self._timer = timer
        self._renderer = renderer
        self._clock = clock

        self.state: WidgetState | None = None
        self.commands: TaskCommandHandler | None = None
        self.scheduler: DeadlineScheduler | None = None

    @property
    def enabled(self) -> bool:
        return self.state is not None

    def enable(self) -> WidgetState:
        if self.state is not None:
            return self.state

        result = self._store.load()
        if result.error is not None:
            if result.error.kind == StoreErrorKind.NOT_FOUND:
                logger.info("No task file at %s yet; starting empty", self._store.path)
            else:
                logger.warning(
                    "Could not load tasks from %s (%s): %s; starting empty",
                    self._store.path,
                    result.error.kind.value,
                    result.error.detail,
                )

        reminder_minutes = int(getattr(self._settings, "reminder_minutes", 10))
        state = WidgetState(
            settings=self._settings,
            store=self._store,
            notifier=self._notifier,
            tasks=TaskCollection(result.tasks),
            renderer=self._renderer,
            clock=self._clock,
            reminder_window=timedelta(minutes=reminder_minutes),
        )

        self.state = state
        self.commands = TaskCommandHandler(state)
        self.scheduler = DeadlineScheduler(state)

        refresh(state)
        self.scheduler.start(
            self._timer, float(getattr(self._settings, "check_interval_seconds", 60.0))
        )
        logger.info("Widget enabled tasks=%d", len(state.tasks))
        return state

    def disable(self) -> None:
        if self.scheduler is not None:
            self.scheduler.stop()
        if self.state is not None:
            self.state.tasks.clear()

        self.state = None
        self.commands = None
        self.scheduler = None
        logger.info("Widget disabled")
