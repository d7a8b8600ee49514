# tests/test_task_commands.py

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta, timezone

from vibe_todo.tasks.task_commands import (
    QUICK_DEADLINES,
    TaskCommandHandler,
    now_fields,
    parse_manual_deadline,
)
from vibe_todo.tasks.task_presenter import present
from vibe_todo.tasks.task_store import TaskStore

from .conftest import T0


def test_add_rejects_blank_text(state, store) -> None:
    handler = TaskCommandHandler(state)
    assert handler.add_task("   ") is None
    assert handler.add_task(None) is None
    assert len(state.tasks) == 0
    assert store.saves == 0


def test_add_persists_then_refreshes(state, store, renderer) -> None:
    handler = TaskCommandHandler(state)
    task = handler.add_task("  buy milk  ")

    assert task is not None
    assert task.text == "buy milk"
    assert task.notified is False and task.reminded is False
    assert store.saves == 1
    assert [t.text for t in TaskStore(store.path).load().tasks] == ["buy milk"]
    assert renderer.last[0].task_id == task.task_id


def test_naive_deadline_is_taken_as_utc(state, store) -> None:
    handler = TaskCommandHandler(state)
    task = handler.add_task("naive", datetime(2026, 3, 14, 13, 0))

    assert task is not None
    assert task.deadline == datetime(2026, 3, 14, 13, 0, tzinfo=UTC)
    assert task.deadline.tzinfo is not None
    # Mixed with aware deadlines, sorting and presenting must not raise.
    handler.add_task("aware", T0 + timedelta(hours=2))
    rows = present(state.tasks, T0)
    assert [r.text for r in rows] == ["naive", "aware"]
    assert rows[0].time_remaining == "1h 0m"

    saved = json.loads(store.path.read_text("utf-8"))
    assert saved[0]["deadline"] == "2026-03-14T13:00:00.000Z"


def test_quick_task_deadline_is_offset_from_now(state, notifier) -> None:
    handler = TaskCommandHandler(state)
    task = handler.add_quick_task("x", QUICK_DEADLINES["1d"])

    assert task is not None
    assert task.deadline == T0 + timedelta(hours=24)
    assert notifier.sent == [("Task Added", '"x" - Due in 24h')]


def test_quick_task_with_blank_text_is_noop(state, notifier) -> None:
    assert TaskCommandHandler(state).add_quick_task("", 1) is None
    assert notifier.sent == []


def test_toggle_flips_completed_only(state) -> None:
    handler = TaskCommandHandler(state)
    task = handler.add_task("t", T0 - timedelta(minutes=1))
    assert task is not None
    task.notified = True

    assert handler.toggle_complete(task.task_id) is True
    assert task.completed is True
    assert task.notified is True

    assert handler.toggle_complete(task.task_id) is True
    assert task.completed is False
    assert handler.toggle_complete(999) is False


def test_remove_then_fresh_presentation_never_shows_it(state, store) -> None:
    handler = TaskCommandHandler(state)
    a = handler.add_task("a")
    b = handler.add_task("b", T0 + timedelta(hours=1))
    c = handler.add_task("c")
    assert a and b and c

    assert handler.remove_task(b.task_id) is True
    rows = present(state.tasks, T0)
    assert [r.text for r in rows] == ["a", "c"]
    assert b.task_id not in {r.task_id for r in rows}

    # Ids stay stable after removal: removing "c" by id still hits "c".
    assert handler.remove_task(c.task_id) is True
    assert [t.text for t in state.tasks] == ["a"]
    assert handler.remove_task(c.task_id) is False
    assert [t.text for t in TaskStore(store.path).load().tasks] == ["a"]


def test_failed_save_is_retried_on_next_mutation(state, store) -> None:
    handler = TaskCommandHandler(state)
    store.fail_saves = 1

    first = handler.add_task("first")
    assert first is not None
    assert state.save_pending is True
    assert [t.text for t in state.tasks] == ["first"]

    handler.add_task("second")
    assert state.save_pending is False
    assert [t.text for t in TaskStore(store.path).load().tasks] == ["first", "second"]


def test_parse_manual_deadline() -> None:
    plus2 = timezone(timedelta(hours=2))

    assert parse_manual_deadline("2026-03-14", "18:30", UTC) == datetime(2026, 3, 14, 18, 30, tzinfo=UTC)
    assert parse_manual_deadline("2026-3-4", "9:05", plus2) == datetime(2026, 3, 4, 7, 5, tzinfo=UTC)

    assert parse_manual_deadline("", "18:30") is None
    assert parse_manual_deadline("2026-03-14", "") is None
    assert parse_manual_deadline("2026-03", "18:30") is None
    assert parse_manual_deadline("2026-02-30", "10:00") is None
    assert parse_manual_deadline("2026-03-14", "25:00") is None
    assert parse_manual_deadline("tomorrow", "noon") is None


def test_manual_task_with_bad_deadline_is_still_created(state) -> None:
    handler = TaskCommandHandler(state)
    task = handler.add_manual_task("dentist", "2026-13-01", "10:00")

    assert task is not None
    assert task.deadline is None
    assert len(state.tasks) == 1


def test_manual_task_with_good_deadline(state) -> None:
    task = TaskCommandHandler(state).add_manual_task("dentist", "2026-03-20", "10:00", tz=UTC)
    assert task is not None
    assert task.deadline == datetime(2026, 3, 20, 10, 0, tzinfo=UTC)


def test_now_fields_prefill_format() -> None:
    assert now_fields(datetime(2026, 3, 4, 9, 5, tzinfo=UTC), UTC) == ("2026-03-04", "09:05")
