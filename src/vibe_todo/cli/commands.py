# src/vibe_todo/cli/commands.py

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Callable, Sequence
from typing import cast

from ..core.widget import VibeWidget
from ..tasks.task_api import refresh
from ..tasks.task_commands import QUICK_DEADLINES, now_fields
from ..tasks.task_presenter import TaskRow

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[VibeWidget, list[str]], str]
CommandHandler3 = Callable[[VibeWidget, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

EMPTY_LIST = "No tasks yet! ✨"
DISABLED = "Widget is disabled."

_QUICK_RE = re.compile(r"^\+?(\d+(?:\.\d+)?)([hdw])$")
_UNIT_HOURS = {"h": 1, "d": 24, "w": 168}


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        widget: VibeWidget,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(widget, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(widget, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_row(row: TaskRow) -> str:
    mark = "✓" if row.completed else "○"
    line = f"#{row.task_id} {mark} {row.text}"
    if row.deadline_label is not None:
        remaining = f"⚠️ {row.time_remaining}" if row.overdue else row.time_remaining
        line += f"  ⏰ {row.deadline_label} ({remaining})"
    return line


def format_rows(rows: Sequence[TaskRow]) -> str:
    if not rows:
        return EMPTY_LIST
    return "\n".join(format_row(r) for r in rows)


def parse_quick_preset(token: str) -> float | None:
    """'+1h', '3h', '1d', '1w' (or any N with h/d/w) -> hours."""
    t = token.strip().lower().lstrip("+")
    if t in QUICK_DEADLINES:
        return float(QUICK_DEADLINES[t])
    m = _QUICK_RE.match(t)
    if not m:
        return None
    return float(m.group(1)) * _UNIT_HOURS[m.group(2)]


def _parse_task_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def cmd_help(widget: VibeWidget, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(widget: VibeWidget, args: list[str]) -> str:
    if widget.state is None:
        return DISABLED
    return format_rows(refresh(widget.state))


def cmd_add(widget: VibeWidget, args: list[str]) -> str:
    """
    /add <text>                        -> undated task
    /add <text> @ YYYY-MM-DD HH:MM     -> task with a custom deadline
    """
    if widget.commands is None:
        return DISABLED

    text_parts = args
    date_text = time_text = None
    for i, tok in enumerate(args):
        if tok.startswith("@"):
            text_parts = args[:i]
            rest = ([tok[1:]] if tok != "@" else []) + args[i + 1 :]
            date_text = rest[0] if len(rest) > 0 else None
            time_text = rest[1] if len(rest) > 1 else None
            break

    task = widget.commands.add_manual_task(" ".join(text_parts), date_text, time_text)
    if task is None:
        return "Usage: /add <text> [@ YYYY-MM-DD HH:MM]"
    if task.deadline is None and date_text is not None:
        return f"Added #{task.task_id} without a deadline (expected YYYY-MM-DD HH:MM)."
    return f"Added #{task.task_id}."


def cmd_quick(widget: VibeWidget, args: list[str]) -> str:
    """/quick <1h|3h|1d|1w> <text>"""
    if widget.commands is None:
        return DISABLED
    if len(args) < 2:
        return "Usage: /quick <1h|3h|1d|1w> <text>"

    hours = parse_quick_preset(args[0])
    if hours is None:
        return f"Unknown preset {args[0]!r}. Use one of: {', '.join(QUICK_DEADLINES)}."

    task = widget.commands.add_quick_task(" ".join(args[1:]), hours)
    if task is None:
        return "Task text is empty."
    return f"Added #{task.task_id} (due in {hours:g}h)."


def cmd_done(widget: VibeWidget, args: list[str]) -> str:
    if widget.commands is None:
        return DISABLED
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    if not widget.commands.toggle_complete(task_id):
        return f"No task #{task_id}."
    return f"Toggled #{task_id}."


def cmd_remove(widget: VibeWidget, args: list[str]) -> str:
    if widget.commands is None:
        return DISABLED
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    if not widget.commands.remove_task(task_id):
        return f"No task #{task_id}."
    return f"Removed #{task_id}."


def cmd_now(widget: VibeWidget, args: list[str]) -> str:
    if widget.state is None:
        return DISABLED
    date_text, time_text = now_fields(widget.state.now())
    return f"{date_text} {time_text}"


def cmd_check(widget: VibeWidget, args: list[str], emit: CommandEmitter | None = None) -> str:
    if widget.scheduler is None:
        return DISABLED
    if emit:
        emit("Checking deadlines...")
    widget.scheduler.tick()
    return "Deadline check done."


def cmd_status(widget: VibeWidget, args: list[str]) -> str:
    state = widget.state
    if state is None:
        return DISABLED
    settings = state.settings
    open_count = sum(1 for t in state.tasks if not t.completed)
    return (
        "Status:\n"
        f"  Task file: {state.store.path}\n"
        f"  Tasks: {len(state.tasks)} ({open_count} open)\n"
        f"  Check interval: {getattr(settings, 'check_interval_seconds', 60):g}s\n"
        f"  Reminder window: {int(state.reminder_window.total_seconds() // 60)}m\n"
        f"  Unsaved changes: {'YES' if state.save_pending else 'no'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks (soonest deadline first).", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text> [@ YYYY-MM-DD HH:MM].")
registry.register("quick", cmd_quick, help_text="Add with a quick deadline: /quick 1h|3h|1d|1w <text>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("rm", cmd_remove, help_text="Remove a task: /rm <id>.", aliases=["remove", "del"])
registry.register("now", cmd_now, help_text="Print the current date/time in deadline format.")
registry.register("check", cmd_check, help_text="Run the deadline check now.")
registry.register("status", cmd_status, help_text="Show task file, counts and timing.")
