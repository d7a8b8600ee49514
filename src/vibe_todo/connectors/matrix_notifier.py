# src/vibe_todo/connectors/matrix_notifier.py

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

logger = logging.getLogger(__name__)


class MatrixNotifier:
    """
    Notifier that posts deadline messages into one Matrix room.

    notify() is synchronous (fire-and-forget): it schedules the send on the
    event loop and returns. Send failures are logged, never raised.
    """

    def __init__(self, client: Any, room_id: str, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._client = client
        self._room_id = room_id
        self._loop = loop
        self._pending: set[asyncio.Task[None]] = set()

    async def _send(self, text: str) -> None:
        await self._client.room_send(
            room_id=self._room_id,
            message_type="m.room.message",
            content={"msgtype": "m.text", "body": text},
            ignore_unverified_devices=True,
        )

    def _on_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Matrix notification failed room=%s: %r", self._room_id, exc)

    def notify(self, title: str, body: str) -> None:
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._send(f"{title}\n{body}"))
        self._pending.add(task)
        task.add_done_callback(self._on_done)

    async def aclose(self, timeout: float = 10.0) -> None:
        """Wait (bounded) for in-flight sends, then close the client."""
        if self._pending:
            _done, not_done = await asyncio.wait(set(self._pending), timeout=timeout)
            for t in not_done:
                t.cancel()
        with contextlib.suppress(Exception):
            await self._client.close()


async def create_matrix_notifier(settings) -> MatrixNotifier | None:
    """Log in (or restore the session) and join the notification room."""
    room_id = (getattr(settings, "matrix_room_id", "") or "").strip()
    if not room_id:
        logger.error("Matrix notifications enabled but VIBE_MATRIX_ROOM_ID is not set")
        return None

    from .matrix_client import create_matrix_client

    client = await create_matrix_client(settings)
    if client is None:
        return None

    try:
        await client.join(room_id)
    except Exception as e:
        logger.warning("Failed to join Matrix room %s: %r", room_id, e)

    logger.info("Matrix notifications -> room %s", room_id)
    return MatrixNotifier(client, room_id)
