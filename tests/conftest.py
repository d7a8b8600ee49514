# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from vibe_todo.core.state import WidgetState
from vibe_todo.core.widget import VibeWidget

from .fakes import CountingStore, FakeClock, FakeNotifier, FakeTimer, RecordingRenderer

T0 = datetime(2026, 3, 14, 12, 0, tzinfo=UTC)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the widget and commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the user's environment and ~/.vibe_tasks.json.
    """
    return SimpleNamespace(
        app_name="Vibe To-Do (test)",
        tasks_path=tmp_path / "vibe_tasks.json",
        data_dir=tmp_path / ".local",
        check_interval_seconds=60.0,
        reminder_minutes=10,
        console_notify=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(T0)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def store(settings: SimpleNamespace) -> CountingStore:
    return CountingStore(settings.tasks_path)


@pytest.fixture()
def state(settings, store, notifier, renderer, clock) -> WidgetState:
    """
    Enabled-widget context wired with deterministic fakes.

    NOTE: the JSON store is real (tmp file) because its behavior is part of
    what the command/scheduler tests check.
    """
    return WidgetState(
        settings=settings,
        store=store,
        notifier=notifier,
        renderer=renderer,
        clock=clock,
    )


@pytest.fixture()
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture()
def widget(settings, store, notifier, renderer, clock, timer) -> VibeWidget:
    return VibeWidget(
        settings=settings,
        store=store,
        notifier=notifier,
        timer=timer,
        renderer=renderer,
        clock=clock,
    )
