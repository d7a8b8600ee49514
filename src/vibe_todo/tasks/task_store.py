# src/vibe_todo/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from .task_models import TaskRecord

logger = logging.getLogger(__name__)


class StoreErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"
    WRITE_FAILED = "write_failed"


@dataclass(slots=True, frozen=True)
class StoreError:
    kind: StoreErrorKind
    detail: str = ""


@dataclass(slots=True)
class LoadResult:
    tasks: list[TaskRecord] = field(default_factory=list)
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True, frozen=True)
class SaveResult:
    ok: bool
    error: StoreError | None = None


class TaskStore:
    """
    JSON file task store.

    The file holds one JSON array. Each element is either a legacy bare
    string or a task object (text, completed, deadline, notified, reminded).

    Failure policy:
    - load never raises; any problem yields an empty list plus an error kind
    - save never raises; the full list is written to a temp file in the same
      directory and moved over the target with os.replace
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()
        logger.info("TaskStore ready path=%s exists=%s", self._path, self._path.exists())

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> LoadResult:
        if not self._path.exists():
            return LoadResult(error=StoreError(StoreErrorKind.NOT_FOUND, str(self._path)))

        try:
            raw = self._path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return LoadResult(error=StoreError(StoreErrorKind.UNREADABLE, repr(e)))

        try:
            data = json.loads(raw)
        except ValueError as e:
            return LoadResult(error=StoreError(StoreErrorKind.MALFORMED, str(e)))

        if not isinstance(data, list):
            return LoadResult(
                error=StoreError(StoreErrorKind.MALFORMED, f"expected JSON array, got {type(data).__name__}")
            )

        tasks: list[TaskRecord] = []
        for pos, item in enumerate(data):
            task = TaskRecord.from_raw(item)
            if task is None:
                logger.warning("Skipping unsupported task entry #%d: %r", pos, item)
                continue
            tasks.append(task)

        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return LoadResult(tasks=tasks)

    def save(self, tasks: Iterable[TaskRecord]) -> SaveResult:
        tmp_name: str | None = None
        try:
            payload = json.dumps([t.to_raw() for t in tasks], ensure_ascii=False)
            self._path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=str(self._path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            return SaveResult(ok=False, error=StoreError(StoreErrorKind.WRITE_FAILED, repr(e)))
        finally:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)

        with contextlib.suppress(Exception):
            # Best-effort: the list is personal, keep the file private on disk.
            os.chmod(self._path, 0o600)

        logger.debug("Saved tasks to %s", self._path)
        return SaveResult(ok=True)
