# src/vibe_todo/core/timer.py

from __future__ import annotations

import asyncio
import logging

from .ports import TimerCallback

logger = logging.getLogger(__name__)


class AsyncioTimerHandle:
    """Cancellable handle for one periodic source."""

    __slots__ = ("_handle", "_cancelled")

    def __init__(self) -> None:
        self._handle: asyncio.TimerHandle | None = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioPeriodicTimer:
    """
    PeriodicTimer on top of an asyncio event loop.

    Mirrors GLib.timeout_add: the callback runs on the loop thread every
    interval_ms and keeps being rescheduled while it returns True. A callback
    that raises is logged and rescheduled.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule_periodic(self, interval_ms: int, callback: TimerCallback) -> AsyncioTimerHandle:
        loop = self._get_loop()
        delay = max(1, int(interval_ms)) / 1000.0
        handle = AsyncioTimerHandle()

        def _fire() -> None:
            if handle.cancelled:
                return
            try:
                keep_running = bool(callback())
            except Exception:
                logger.exception("Periodic callback failed; keeping the timer alive")
                keep_running = True

            if keep_running and not handle.cancelled:
                handle._handle = loop.call_later(delay, _fire)
            else:
                handle._handle = None

        handle._handle = loop.call_later(delay, _fire)
        logger.debug("Periodic timer scheduled every %.3fs", delay)
        return handle
