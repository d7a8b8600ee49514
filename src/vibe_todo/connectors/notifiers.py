# src/vibe_todo/connectors/notifiers.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from ..core.ports import Notifier

logger = logging.getLogger(__name__)


def ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleNotifier:
    """Prints notifications to stdout (optionally with a terminal bell)."""

    __slots__ = ("_enable_bell",)

    def __init__(self, enable_bell: bool = False) -> None:
        self._enable_bell = enable_bell

    def notify(self, title: str, body: str) -> None:
        print(f"\n[{ts_local()}] [{title}] {body}", flush=True)
        if self._enable_bell:
            print("\a", end="", flush=True)


class LoggingNotifier:
    """Headless sink: notifications only go to the log."""

    def notify(self, title: str, body: str) -> None:
        logger.info("NOTIFY %s: %s", title, body)


class FanoutNotifier:
    """Delivers to several sinks; one failing sink does not block the others."""

    def __init__(self, notifiers: Iterable[Notifier]) -> None:
        self._notifiers = list(notifiers)

    def notify(self, title: str, body: str) -> None:
        for n in self._notifiers:
            try:
                n.notify(title, body)
            except Exception:
                logger.exception("Notifier %s failed", type(n).__name__)
