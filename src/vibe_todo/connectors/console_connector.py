# src/vibe_todo/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Sequence

from ..cli.commands import CommandRegistry, format_rows
from ..cli.commands import registry as command_registry
from ..core.widget import VibeWidget
from ..tasks.task_presenter import TaskRow
from .notifiers import ts_local

logger = logging.getLogger(__name__)

PROMPT = ">>> "


def _print_ts(text: str) -> None:
    print(f"[{ts_local()}] {text}", flush=True)


class ConsoleView:
    """
    Console stand-in for the popup menu.

    Keeps the latest rows from each refresh (every command and every tick)
    and prints them only when asked, like a menu that is rendered but closed.
    """

    def __init__(self) -> None:
        self.rows: list[TaskRow] = []
        self.renders = 0

    def __call__(self, rows: Sequence[TaskRow]) -> None:
        self.rows = list(rows)
        self.renders += 1

    def render_text(self) -> str:
        return format_rows(self.rows)


def _start_stdin_reader(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[str | None]) -> threading.Thread:
    """
    Read stdin in a daemon thread and hand lines to the loop.

    Commands still execute on the loop thread, so they never interleave
    with scheduler ticks. None marks EOF / Ctrl+C.
    """

    def _reader() -> None:
        while True:
            try:
                line = input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                loop.call_soon_threadsafe(queue.put_nowait, None)
                return
            loop.call_soon_threadsafe(queue.put_nowait, line)

    t = threading.Thread(target=_reader, name="vibe-stdin", daemon=True)
    t.start()
    return t


def handle_line(widget: VibeWidget, line: str, registry: CommandRegistry = command_registry) -> str | None:
    """
    One console line -> reply text.

    Plain text (no leading slash) adds an undated task, like typing into the
    entry and pressing "Add".
    """
    line = line.strip()
    if not line:
        return None

    try:
        reply = registry.handle(widget, line, emit=_print_ts)
        if reply is not None:
            return reply
        if widget.commands is None:
            return "Widget is disabled."
        task = widget.commands.add_task(line)
        return f"Added #{task.task_id}." if task is not None else None
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."


async def run_console_loop(widget: VibeWidget, view: ConsoleView | None = None) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    if view is not None:
        print(view.render_text(), flush=True)

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[str | None] = asyncio.Queue()
    _start_stdin_reader(loop, queue)

    while True:
        line = await queue.get()
        if line is None:
            logger.info("Console EOF received, exiting.")
            break

        if line.strip().lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(widget, line)
        if reply is not None:
            _print_ts(reply)

    logger.info("Console connector finished.")
