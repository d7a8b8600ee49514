# src/vibe_todo/tasks/task_collection.py

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .task_models import TaskRecord


class TaskCollection:
    """
    Ordered, in-memory task list owned by one widget instance.

    Storage order is insertion order. Every record gets a stable id when it
    enters the collection, and commands address records by that id rather
    than by position, so a sort or a removal can never redirect a command
    to the wrong task.
    """

    def __init__(self, tasks: Iterable[TaskRecord] = ()) -> None:
        self._tasks: list[TaskRecord] = []
        self._next_id = 1
        self.extend(tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[TaskRecord]:
        return iter(self._tasks)

    def __bool__(self) -> bool:
        return bool(self._tasks)

    def _assign_id(self, task: TaskRecord) -> TaskRecord:
        task.task_id = self._next_id
        self._next_id += 1
        return task

    def add(self, task: TaskRecord) -> TaskRecord:
        self._tasks.append(self._assign_id(task))
        return task

    def extend(self, tasks: Iterable[TaskRecord]) -> None:
        for task in tasks:
            self.add(task)

    def get(self, task_id: int) -> TaskRecord | None:
        for task in self._tasks:
            if task.task_id == task_id:
                return task
        return None

    def index_of(self, task_id: int) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.task_id == task_id:
                return i
        return None

    def remove(self, task_id: int) -> TaskRecord | None:
        idx = self.index_of(task_id)
        if idx is None:
            return None
        return self._tasks.pop(idx)

    def clear(self) -> None:
        self._tasks.clear()

    def snapshot(self) -> list[TaskRecord]:
        """Shallow copy of the current order (records are shared)."""
        return list(self._tasks)
