# src/tododos/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class TaskStatus(StrEnum):
    OPEN = "open"
    DONE = "done"

    @classmethod
    def from_row(cls, raw: str | None) -> TaskStatus:
        """Lenient parse for stored rows (accepts the legacy German values)."""
        value = (raw or "").strip().lower()
        if value in ("done", "erledigt"):
            return cls.DONE
        return cls.OPEN

    def toggled(self) -> TaskStatus:
        return TaskStatus.OPEN if self is TaskStatus.DONE else TaskStatus.DONE


class Priority(StrEnum):
    NORMAL = "normal"
    HIGH = "high"
    LOW = "low"

    @classmethod
    def parse(cls, raw: str) -> Priority | None:
        """Strict parse for user input. Returns None for anything unknown."""
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None

    @classmethod
    def from_row(cls, raw: str | None) -> Priority:
        value = (raw or "").strip().lower()
        if value in ("high", "hoch"):
            return cls.HIGH
        if value in ("low", "niedrig"):
            return cls.LOW
        return cls.NORMAL


class ViewMode(StrEnum):
    MAIN = "main"
    DETAILS = "details"
    HELP = "help"


@dataclass(slots=True)
class TaskRecord:
    id: int
    title: str
    status: TaskStatus = TaskStatus.OPEN
    priority: Priority = Priority.NORMAL
    due_date: str = ""
    tags: list[str] = field(default_factory=list)

    @property
    def is_done(self) -> bool:
        return self.status is TaskStatus.DONE


# Fields TaskStore.edit() accepts; ``id`` is positional and never edited.
EDITABLE_FIELDS = frozenset({"title", "status", "priority", "due_date", "tags"})
