# src/vibe_todo/tasks/task_presenter.py

from __future__ import annotations

"""
Display derivation for the task list.

Everything here is a pure function of (tasks, now): no mutation, no I/O.
The UI layer gets rows in display order; each row carries the task's stable
id so checkbox/remove affordances address the right record.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo

from .task_models import TaskRecord

OVERDUE = "OVERDUE"
UNTITLED = "Untitled Task"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(slots=True, frozen=True)
class TaskRow:
    task_id: int | None
    index: int
    text: str
    completed: bool
    deadline_label: str | None
    time_remaining: str | None
    overdue: bool


def sort_tasks(tasks: Iterable[TaskRecord]) -> list[tuple[int, TaskRecord]]:
    """
    Display order: dated tasks by ascending deadline, then undated tasks.

    Returns (original_index, task) pairs; ties keep collection order.
    """
    indexed = list(enumerate(tasks))
    indexed.sort(
        key=lambda pair: (
            pair[1].deadline is None,
            pair[1].deadline.timestamp() if pair[1].deadline is not None else 0.0,
            pair[0],
        )
    )
    return indexed


def time_remaining(deadline: datetime, now: datetime) -> str:
    """
    Compact countdown, floor-truncated to the minute.

    "OVERDUE" at or past the deadline; "Nd Nh" beyond 24 whole hours;
    "Nh Nm" from one hour; otherwise "Nm".
    """
    diff = deadline - now
    if diff <= timedelta(0):
        return OVERDUE

    total_minutes = int(diff.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)

    if hours > 24:
        days, rem_hours = divmod(hours, 24)
        return f"{days}d {rem_hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_datetime(deadline: datetime, tz: tzinfo | None = None) -> str:
    """Short label like "Oct 19, 14:05" in local time (or `tz`)."""
    d = deadline.astimezone(tz)
    return f"{_MONTHS[d.month - 1]} {d.day}, {d.hour:02d}:{d.minute:02d}"


def present(tasks: Iterable[TaskRecord], now: datetime, tz: tzinfo | None = None) -> list[TaskRow]:
    rows: list[TaskRow] = []
    for index, task in sort_tasks(tasks):
        label: str | None = None
        remaining: str | None = None
        if task.deadline is not None:
            label = format_datetime(task.deadline, tz)
            remaining = time_remaining(task.deadline, now)

        rows.append(
            TaskRow(
                task_id=task.task_id,
                index=index,
                text=task.text or UNTITLED,
                completed=task.completed,
                deadline_label=label,
                time_remaining=remaining,
                overdue=remaining == OVERDUE,
            )
        )
    return rows
