# src/vibe_todo/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.state import WidgetState
from .task_presenter import TaskRow, present

logger = logging.getLogger(__name__)


def persist(state: WidgetState) -> bool:
    """
    Save the full collection; never raises.

    A failed save is logged and leaves state.save_pending set, so the next
    mutation (or scheduler tick) writes the whole list again.
    """
    result = state.store.save(state.tasks)
    if not result.ok:
        state.save_pending = True
        err = result.error
        logger.error(
            "Failed to save %d tasks to %s (%s): %s",
            len(state.tasks),
            state.store.path,
            err.kind.value if err else "unknown",
            err.detail if err else "",
        )
        return False

    if state.save_pending:
        logger.info("Pending task save succeeded path=%s", state.store.path)
    state.save_pending = False
    return True


def refresh(state: WidgetState) -> list[TaskRow]:
    """Derive fresh rows and hand them to the UI sink (if any)."""
    rows = present(state.tasks, state.now())
    if state.renderer is not None:
        try:
            state.renderer(rows)
        except Exception:
            logger.exception("Task renderer failed")
    return rows
