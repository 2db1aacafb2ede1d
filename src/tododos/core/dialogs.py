# src/tododos/core/dialogs.py

"""
Multi-step field collection for the add/edit commands.

Each routine asks its questions in a fixed order (title -> priority -> due date
-> tags) through an injected `ask` callable and validates every answer on its
own. Nothing here touches the TaskStore: add returns a draft, edit returns the
partial update dict for TaskStore.edit().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .fields import is_clear_token, parse_due_date, parse_priority, parse_tags
from .models import Priority, TaskRecord
from .ports import Ask, Emit


@dataclass(slots=True)
class TaskDraft:
    title: str
    priority: Priority = Priority.NORMAL
    due_date: str = ""
    tags: list[str] = field(default_factory=list)


def collect_new_task(ask: Ask, emit: Emit, *, today: date | None = None) -> TaskDraft | None:
    """Returns None when the title is left empty (add aborted)."""
    title = ask("Title: ").strip()
    if not title:
        return None

    priority = Priority.NORMAL
    raw_priority = ask("Priority [normal/high/low] (Enter for normal): ").strip()
    if raw_priority:
        parsed = parse_priority(raw_priority)
        if parsed is None:
            emit(f'Invalid priority "{raw_priority}" - using "normal".')
        else:
            priority = parsed

    due_date = ""
    raw_due = ask("Due date [YYYY-MM-DD, D.M.YYYY or D.M] (Enter for none): ").strip()
    if raw_due:
        try:
            due_date = parse_due_date(raw_due, today=today)
        except ValueError:
            emit(f'Invalid date "{raw_due}" - ignored.')

    raw_tags = ask("Tags [comma,separated] (Enter for none): ")
    tags = parse_tags(raw_tags) if raw_tags.strip() else []

    return TaskDraft(title=title, priority=priority, due_date=due_date, tags=tags)


def collect_task_updates(
    task: TaskRecord,
    ask: Ask,
    emit: Emit,
    *,
    today: date | None = None,
) -> dict[str, Any]:
    """Empty answers keep the current value; 'none'/'keine' clears due date and tags."""
    updates: dict[str, Any] = {}

    new_title = ask(f"Title [{task.title}]: ").strip()
    if new_title:
        updates["title"] = new_title

    raw_priority = ask(f"Priority [{task.priority}] (normal/high/low): ").strip()
    if raw_priority:
        parsed = parse_priority(raw_priority)
        if parsed is None:
            emit(f'Invalid priority "{raw_priority}" - not changed.')
        else:
            updates["priority"] = parsed

    current_due = task.due_date or "none"
    raw_due = ask(f"Due date [{current_due}] (YYYY-MM-DD, D.M.YYYY, D.M or 'none'): ").strip()
    if raw_due:
        if is_clear_token(raw_due):
            updates["due_date"] = ""
        else:
            try:
                updates["due_date"] = parse_due_date(raw_due, today=today)
            except ValueError:
                emit(f'Invalid date "{raw_due}" - not changed.')

    current_tags = ", ".join(task.tags) if task.tags else "none"
    raw_tags = ask(f"Tags [{current_tags}] (comma,separated or 'none'): ").strip()
    if raw_tags:
        updates["tags"] = [] if is_clear_token(raw_tags) else parse_tags(raw_tags)

    return updates
