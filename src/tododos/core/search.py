# src/tododos/core/search.py

from __future__ import annotations

from collections.abc import Sequence

from .models import TaskRecord


def filter_tasks(tasks: Sequence[TaskRecord], term: str) -> list[TaskRecord]:
    """Case-insensitive substring match on titles. Empty term keeps everything."""
    if not term:
        return list(tasks)
    needle = term.lower()
    return [t for t in tasks if needle in t.title.lower()]
