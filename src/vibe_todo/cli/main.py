# src/vibe_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the widget, then runs on one asyncio loop:
- the periodic deadline check (timer on the loop),
- the console connector (optional),
- the Matrix notification sink (optional).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import TYPE_CHECKING

from ..cli.bootstrap import build_notifier, create_widget
from ..config import get_settings
from ..connectors.console_connector import ConsoleView, run_console_loop
from ..core.ports import Notifier
from ..core.timer import AsyncioPeriodicTimer
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..connectors.matrix_notifier import MatrixNotifier


async def _cancel_and_collect(*tasks: asyncio.Task) -> None:
    """Cancel the tasks and wait for them; a crash in any of them is logged."""
    for t in tasks:
        t.cancel()
    results = await asyncio.gather(*tasks, return_exceptions=True)
    for t, result in zip(tasks, results):
        if isinstance(result, Exception):
            logger.error("Task %s crashed", t.get_name(), exc_info=result)


async def _run(settings) -> None:
    loop = asyncio.get_running_loop()

    matrix: MatrixNotifier | None = None
    extra: list[Notifier] = []
    if settings.matrix_enabled:
        from ..connectors.matrix_notifier import create_matrix_notifier

        try:
            matrix = await create_matrix_notifier(settings)
        except Exception:
            logger.exception("Matrix notifier setup failed; continuing without it.")
            matrix = None
        if matrix is not None:
            extra.append(matrix)

    view = ConsoleView()
    widget = create_widget(
        settings=settings,
        timer=AsyncioPeriodicTimer(loop),
        notifier=build_notifier(settings, extra),
        renderer=view,
    )

    # Use an Event so main can wait without a busy loop.
    stop_main = asyncio.Event()

    def _handle_signal(signum: int) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, _handle_signal, sig)

    widget.enable()
    try:
        if settings.console_enabled:
            console = asyncio.create_task(run_console_loop(widget, view), name="console")
            stopper = asyncio.create_task(stop_main.wait(), name="stop-wait")
            await asyncio.wait({console, stopper}, return_when=asyncio.FIRST_COMPLETED)
            await _cancel_and_collect(console, stopper)
        else:
            logger.info("Console disabled. Running deadline checks only. Press Ctrl+C to stop.")
            await stop_main.wait()
    finally:
        # No final save: the last successful command/tick is what survives.
        widget.disable()
        if matrix is not None:
            await matrix.aclose()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/vibe")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logging.getLogger("nio").setLevel(max(console_level, logging.INFO))
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    logger.info("Starting %s (tasks=%s)...", settings.app_name, settings.tasks_path)
    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        pass
    logger.info("Bye.")


if __name__ == "__main__":
    main()
