# tests/test_commands.py

from __future__ import annotations

from datetime import UTC, datetime

from vibe_todo.cli.commands import EMPTY_LIST, CommandRegistry, parse_quick_preset, registry
from vibe_todo.connectors.console_connector import ConsoleView, handle_line

from .conftest import T0


def test_command_registry_routes_2_and_3_params(widget) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(widget, args):
        called["h2"] += 1
        return "h2"

    def h3(widget, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(widget, "/a x") == "h2"
    assert reg.handle(widget, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(widget) -> None:
    reg = CommandRegistry()
    assert reg.handle(widget, "hello") is None
    assert "Unknown command" in (reg.handle(widget, "/nope") or "")


def test_quick_presets() -> None:
    assert parse_quick_preset("+1h") == 1
    assert parse_quick_preset("1d") == 24
    assert parse_quick_preset("1w") == 168
    assert parse_quick_preset("2d") == 48
    assert parse_quick_preset("soon") is None


def test_commands_drive_the_widget(widget) -> None:
    widget.enable()

    assert registry.handle(widget, "/list") == EMPTY_LIST
    assert registry.handle(widget, "/add water plants") == "Added #1."
    assert registry.handle(widget, "/quick 3h write report") == "Added #2 (due in 3h)."
    assert registry.handle(widget, "/add dentist @ 2026-02-30 10:00") == (
        "Added #3 without a deadline (expected YYYY-MM-DD HH:MM)."
    )

    listing = registry.handle(widget, "/list") or ""
    lines = listing.splitlines()
    assert lines[0].startswith("#2 ○ write report  ⏰ ")
    assert lines[0].endswith("(3h 0m)")
    assert lines[1:] == ["#1 ○ water plants", "#3 ○ dentist"]

    assert registry.handle(widget, "/done #1") == "Toggled #1."
    assert registry.handle(widget, "/rm 3") == "Removed #3."
    assert registry.handle(widget, "/rm 3") == "No task #3."
    assert registry.handle(widget, "/done") == "Usage: /done <id>"

    assert widget.state is not None
    assert [(t.text, t.completed) for t in widget.state.tasks] == [
        ("water plants", True),
        ("write report", False),
    ]


def test_add_with_custom_deadline(widget) -> None:
    widget.enable()
    assert registry.handle(widget, "/add review PR @2026-03-15 09:30") == "Added #1."
    assert widget.state is not None
    task = widget.state.tasks.get(1)
    assert task is not None
    local = datetime(2026, 3, 15, 9, 30).astimezone()
    assert task.deadline == local.astimezone(UTC)


def test_commands_when_disabled(widget) -> None:
    assert registry.handle(widget, "/list") == "Widget is disabled."
    assert registry.handle(widget, "/add x") == "Widget is disabled."


def test_console_plain_text_adds_task(widget) -> None:
    widget.enable()
    assert handle_line(widget, "  feed cat ") == "Added #1."
    assert handle_line(widget, "   ") is None
    assert "No task #9." == handle_line(widget, "/done 9")


def test_console_view_keeps_latest_rows(widget) -> None:
    view = ConsoleView()
    view([])
    assert view.render_text() == EMPTY_LIST
    assert view.renders == 1


def test_check_command_runs_a_tick(widget, notifier, clock) -> None:
    widget.enable()
    assert widget.commands is not None
    widget.commands.add_task("x", T0)
    assert registry.handle(widget, "/check") == "Deadline check done."
    assert notifier.sent[-1][1] == '"x" is now due!'
