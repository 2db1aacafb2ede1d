# src/tododos/storage/rows.py

from __future__ import annotations

from collections.abc import Sequence

from ..core.fields import parse_tags
from ..core.models import Priority, TaskRecord, TaskStatus

HEADER: tuple[str, ...] = ("title", "status", "priority", "dueDate", "tags")
MISSING_TITLE = "No description"


def record_to_row(task: TaskRecord) -> list[str]:
    return [task.title, str(task.status), str(task.priority), task.due_date, ",".join(task.tags)]


def row_to_record(row: dict[str, str], position: int) -> TaskRecord:
    return TaskRecord(
        id=position,
        title=(row.get("title") or "").strip() or MISSING_TITLE,
        status=TaskStatus.from_row(row.get("status")),
        priority=Priority.from_row(row.get("priority")),
        due_date=(row.get("dueDate") or "").strip(),
        tags=parse_tags(row.get("tags") or ""),
    )


def values_to_records(header: Sequence[str], values: Sequence[Sequence[str]]) -> list[TaskRecord]:
    """Map raw sheet values (data rows only) by header name. Blank rows are skipped."""
    names = [h.strip() for h in header]
    records: list[TaskRecord] = []
    for raw in values:
        if not any(str(cell).strip() for cell in raw):
            continue
        row = {name: str(raw[i]) if i < len(raw) else "" for i, name in enumerate(names) if name}
        records.append(row_to_record(row, len(records) + 1))
    return records
