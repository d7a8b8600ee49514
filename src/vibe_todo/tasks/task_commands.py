# src/vibe_todo/tasks/task_commands.py

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime, timedelta, tzinfo

from ..core.state import WidgetState
from .task_api import persist, refresh
from .task_models import TaskRecord, parse_deadline

logger = logging.getLogger(__name__)

# Quick-deadline presets offered next to the task entry.
QUICK_DEADLINES: dict[str, int] = {
    "1h": 1,
    "3h": 3,
    "1d": 24,
    "1w": 168,
}

_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{1,2})$")


def parse_manual_deadline(
    date_text: str | None,
    time_text: str | None,
    tz: tzinfo | None = None,
) -> datetime | None:
    """
    Parse `YYYY-MM-DD` + `HH:MM` typed by the user.

    The wall time is read in local time unless `tz` is given. Missing or
    malformed parts yield None (the task is then created without a deadline).
    """
    date_m = _DATE_RE.match((date_text or "").strip())
    time_m = _TIME_RE.match((time_text or "").strip())
    if not date_m or not time_m:
        return None

    year, month, day = (int(p) for p in date_m.groups())
    hour, minute = (int(p) for p in time_m.groups())
    try:
        wall = datetime(year, month, day, hour, minute)
    except ValueError:
        return None

    local = wall.replace(tzinfo=tz) if tz is not None else wall.astimezone()
    return local.astimezone(UTC)


def now_fields(now: datetime, tz: tzinfo | None = None) -> tuple[str, str]:
    """Pre-fill values for the manual date/time entries ("Now" button)."""
    local = now.astimezone(tz)
    return local.strftime("%Y-%m-%d"), local.strftime("%H:%M")


class TaskCommandHandler:
    """
    Mutating operations invoked by the UI.

    Each command validates input, mutates the collection, saves the whole
    list, then asks the view to re-render.
    """

    def __init__(self, state: WidgetState) -> None:
        self._state = state

    def _commit(self) -> None:
        persist(self._state)
        refresh(self._state)

    def add_task(self, text: str | None, deadline: datetime | None = None) -> TaskRecord | None:
        clean = (text or "").strip()
        if not clean:
            return None

        # Naive values are taken as UTC, same as values read from the file.
        deadline = parse_deadline(deadline)
        task = self._state.tasks.add(TaskRecord(text=clean, deadline=deadline))
        logger.info("Task added id=%s deadline=%s", task.task_id, deadline)
        self._commit()
        return task

    def add_quick_task(self, text: str | None, hours: float) -> TaskRecord | None:
        clean = (text or "").strip()
        if not clean:
            return None

        deadline = self._state.now() + timedelta(hours=hours)
        task = self.add_task(clean, deadline)
        if task is not None:
            try:
                self._state.notifier.notify("Task Added", f'"{clean}" - Due in {hours:g}h')
            except Exception:
                logger.exception("Notifier failed for quick add task_id=%s", task.task_id)
        return task

    def add_manual_task(
        self,
        text: str | None,
        date_text: str | None,
        time_text: str | None,
        tz: tzinfo | None = None,
    ) -> TaskRecord | None:
        deadline = parse_manual_deadline(date_text, time_text, tz)
        if deadline is None and ((date_text or "").strip() or (time_text or "").strip()):
            logger.info("Ignoring malformed deadline date=%r time=%r", date_text, time_text)
        return self.add_task(text, deadline)

    def toggle_complete(self, task_id: int) -> bool:
        task = self._state.tasks.get(task_id)
        if task is None:
            logger.warning("toggle_complete: unknown task_id=%s", task_id)
            return False

        task.completed = not task.completed
        logger.info("Task %s completed=%s", task_id, task.completed)
        self._commit()
        return True

    def remove_task(self, task_id: int) -> bool:
        task = self._state.tasks.remove(task_id)
        if task is None:
            logger.warning("remove_task: unknown task_id=%s", task_id)
            return False

        logger.info("Task removed id=%s", task_id)
        self._commit()
        return True
