# src/vibe_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks notification sinks,
- wires the task store, timer and view into a VibeWidget.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.notifiers import ConsoleNotifier, FanoutNotifier, LoggingNotifier
from ..core.ports import Notifier, PeriodicTimer, TaskRenderer
from ..core.widget import VibeWidget
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def build_notifier(settings, extra: list[Notifier] | None = None) -> Notifier:
    """Console (or log-only) sink, plus any extra sinks such as Matrix."""
    base: Notifier = ConsoleNotifier() if getattr(settings, "console_notify", True) else LoggingNotifier()
    sinks = [base, *(extra or [])]
    return sinks[0] if len(sinks) == 1 else FanoutNotifier(sinks)


def create_widget(
    *,
    timer: PeriodicTimer,
    notifier: Notifier | None = None,
    renderer: TaskRenderer | None = None,
    settings=None,
) -> VibeWidget:
    """
    Create a (not yet enabled) widget from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return VibeWidget(
        settings=settings,
        store=TaskStore(settings.tasks_path),
        notifier=notifier if notifier is not None else build_notifier(settings),
        timer=timer,
        renderer=renderer,
    )
