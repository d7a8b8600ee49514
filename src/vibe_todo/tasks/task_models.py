# src/vibe_todo/tasks/task_models.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

_KNOWN_KEYS = frozenset({"text", "completed", "deadline", "notified", "reminded"})


class TaskPhase(StrEnum):
    """
    Notification phase of a dated task.

    Transitions: pending -> reminded -> notified, or pending -> notified
    when the reminder window was skipped. Nothing leaves "notified".
    """

    PENDING = "pending"
    REMINDED = "reminded"
    NOTIFIED = "notified"


def parse_deadline(raw: Any) -> datetime | None:
    """
    Parse a stored ISO-8601 deadline into an aware UTC datetime.

    Naive values are taken as UTC. Anything unparseable yields None.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, str) and raw.strip():
        try:
            dt = datetime.fromisoformat(raw.strip())
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_deadline(deadline: datetime | None) -> str | None:
    """Serialize a deadline as `YYYY-MM-DDTHH:MM:SS.mmmZ` (or None)."""
    if deadline is None:
        return None
    dt = deadline.astimezone(UTC)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


@dataclass(slots=True)
class TaskRecord:
    text: str
    completed: bool = False
    deadline: datetime | None = None
    notified: bool = False
    reminded: bool = False

    # Assigned by TaskCollection; not persisted.
    task_id: int | None = None
    # Unknown keys from the stored object, written back as-is.
    extra: dict[str, Any] = field(default_factory=dict)
    # Stored deadline value that could not be parsed; kept so a save does not drop it.
    raw_deadline: Any = None

    @property
    def phase(self) -> TaskPhase:
        if self.notified:
            return TaskPhase.NOTIFIED
        if self.reminded:
            return TaskPhase.REMINDED
        return TaskPhase.PENDING

    @classmethod
    def from_raw(cls, raw: Any) -> TaskRecord | None:
        """
        Build a record from one stored JSON element.

        Legacy files stored bare strings; those become undated, open tasks.
        Returns None for elements that are neither a string nor an object.
        """
        if isinstance(raw, str):
            return cls(text=raw)

        if not isinstance(raw, dict):
            return None

        text = raw.get("text")
        deadline_raw = raw.get("deadline")
        deadline = parse_deadline(deadline_raw)
        if deadline is None and deadline_raw not in (None, ""):
            logger.warning("Unparseable deadline %r for task %r; treating as undated", deadline_raw, text)

        return cls(
            text="" if text is None else str(text),
            completed=bool(raw.get("completed", False)),
            deadline=deadline,
            notified=bool(raw.get("notified", False)),
            reminded=bool(raw.get("reminded", False)),
            extra={k: v for k, v in raw.items() if k not in _KNOWN_KEYS},
            raw_deadline=deadline_raw if deadline is None else None,
        )

    def to_raw(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.extra)
        out.update(
            {
                "text": self.text,
                "completed": self.completed,
                "deadline": format_deadline(self.deadline) if self.deadline is not None else self.raw_deadline,
                "notified": self.notified,
                "reminded": self.reminded,
            }
        )
        return out
