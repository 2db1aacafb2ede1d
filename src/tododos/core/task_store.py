# src/tododos/core/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .models import EDITABLE_FIELDS, Priority, TaskRecord, TaskStatus

logger = logging.getLogger(__name__)


def count_tasks(tasks: Iterable[TaskRecord]) -> tuple[int, int, int]:
    """(total, open, done) for the summary line."""
    total = done = 0
    for t in tasks:
        total += 1
        done += t.is_done
    return total, total - done, done


class TaskStore:
    """
    In-memory ordered task list.

    Ids are positional: after every structural change (add/delete/replace_all)
    each record's id equals its 1-based position.

    Index arguments are store indexes. Callers working on a filtered view must
    translate with index_of() first. Out-of-range indexes raise IndexError.
    """

    def __init__(self, records: Iterable[TaskRecord] | None = None) -> None:
        self._records: list[TaskRecord] = []
        if records is not None:
            self.replace_all(records)

    # ---- queries ----

    @property
    def records(self) -> list[TaskRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, index: int) -> TaskRecord:
        self._check_index(index)
        return self._records[index]

    def index_of(self, task: TaskRecord) -> int:
        for i, t in enumerate(self._records):
            if t is task:
                return i
        raise ValueError(f"task {task.title!r} is not in this store")

    # ---- mutations ----

    def add(
        self,
        title: str,
        priority: Priority = Priority.NORMAL,
        due_date: str = "",
        tags: list[str] | None = None,
    ) -> TaskRecord | None:
        title = (title or "").strip()
        if not title:
            return None

        task = TaskRecord(
            id=len(self._records) + 1,
            title=title,
            status=TaskStatus.OPEN,
            priority=priority,
            due_date=due_date,
            tags=list(tags or []),
        )
        self._records.append(task)
        logger.debug("Task added id=%s title=%r", task.id, task.title)
        return task

    def edit(self, index: int, updates: dict[str, Any]) -> TaskRecord:
        self._check_index(index)
        unknown = set(updates) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"cannot edit field(s): {', '.join(sorted(unknown))}")

        task = self._records[index]
        for name, value in updates.items():
            if name == "tags":
                value = list(value)
            setattr(task, name, value)
        logger.debug("Task edited id=%s fields=%s", task.id, sorted(updates))
        return task

    def delete(self, index: int) -> TaskRecord:
        self._check_index(index)
        task = self._records.pop(index)
        self._renumber()
        logger.debug("Task deleted title=%r remaining=%d", task.title, len(self._records))
        return task

    def toggle_status(self, index: int) -> TaskRecord:
        self._check_index(index)
        task = self._records[index]
        task.status = task.status.toggled()
        return task

    def replace_all(self, records: Iterable[TaskRecord]) -> None:
        self._records = list(records)
        self._renumber()

    # ---- helpers ----

    def _renumber(self) -> None:
        for position, task in enumerate(self._records, start=1):
            task.id = position

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._records):
            raise IndexError(f"task index {index} out of range (size={len(self._records)})")
