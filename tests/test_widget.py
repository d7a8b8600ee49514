# tests/test_widget.py

from __future__ import annotations

import json
from datetime import timedelta

from vibe_todo.tasks.task_scheduler import DUE_TITLE

from .conftest import T0


def test_enable_loads_renders_and_starts_timer(widget, settings, renderer, timer) -> None:
    settings.tasks_path.write_text('["legacy", {"text": "new", "completed": true}]', "utf-8")

    state = widget.enable()

    assert widget.enabled
    assert [t.text for t in state.tasks] == ["legacy", "new"]
    assert [r.text for r in renderer.last] == ["legacy", "new"]
    assert len(timer.handles) == 1
    assert timer.handles[0].interval_ms == 60_000


def test_enable_with_corrupt_file_starts_empty(widget, settings) -> None:
    settings.tasks_path.write_text("{{{", "utf-8")
    state = widget.enable()
    assert len(state.tasks) == 0


def test_timer_tick_notifies_and_persists(widget, settings, notifier, timer, clock) -> None:
    deadline = (T0 + timedelta(minutes=30)).strftime("%Y-%m-%dT%H:%M:%S.000Z")
    settings.tasks_path.write_text(json.dumps([{"text": "report", "deadline": deadline}]), "utf-8")

    widget.enable()
    clock.advance(minutes=31)
    assert timer.fire() is True

    assert notifier.sent == [(DUE_TITLE, '"report" is now due!')]
    saved = json.loads(settings.tasks_path.read_text("utf-8"))
    assert saved[0]["notified"] is True


def test_disable_cancels_timer_clears_and_does_not_save(widget, settings, store, timer) -> None:
    widget.enable()
    assert widget.commands is not None
    widget.commands.add_task("keep me")
    saves_before = store.saves

    state = widget.state
    widget.disable()

    assert not widget.enabled
    assert timer.handles[0].cancelled is True
    assert state is not None and len(state.tasks) == 0
    assert store.saves == saves_before
    assert [t["text"] for t in json.loads(settings.tasks_path.read_text("utf-8"))] == ["keep me"]


def test_reenable_reloads_from_disk(widget) -> None:
    widget.enable()
    assert widget.commands is not None
    widget.commands.add_task("persisted")
    widget.disable()

    state = widget.enable()
    assert [t.text for t in state.tasks] == ["persisted"]
