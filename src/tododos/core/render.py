# src/tododos/core/render.py

"""
Text projection of the task list and view state.

Everything here is a pure function of its arguments: no printing, no terminal
control sequences. The console connector decides how to put the text on screen.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import TaskRecord, ViewMode
from .search import filter_tasks
from .state import AppState
from .task_store import count_tasks

TITLE_WIDTH = 40
PROMPT_TITLE_WIDTH = 20
ELLIPSIS = "..."
SELECTED_MARKER = ">"

COMMAND_HINT = "Commands: add, delete, edit, toggle, search, help, quit"
EMPTY_LIST_TEXT = 'No tasks yet. Enter "add" to create one.'
EMPTY_SEARCH_TEXT = "No tasks match the search."
NOTHING_SELECTED_TEXT = "No task selected."


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[:width] + ELLIPSIS


def _summary_line(tasks: Sequence[TaskRecord]) -> str:
    total, open_, done = count_tasks(tasks)
    return f"Tasks: {total} | Open: {open_} | Done: {done}"


def _row(position: int, task: TaskRecord, selected: bool) -> str:
    marker = SELECTED_MARKER if selected else " "
    return (
        f"{marker} {position:>3}  {task.status:<6}  {task.priority:<8}  "
        f"{task.due_date:<10}  {truncate(task.title, TITLE_WIDTH)}"
    ).rstrip()


def render_main(
    tasks: Sequence[TaskRecord],
    search_term: str,
    selected_index: int | None,
) -> str:
    lines = [_summary_line(tasks), COMMAND_HINT, ""]

    if search_term:
        lines.append(f'Search: "{search_term}" (enter "clear" to reset)')
        lines.append("")

    if not tasks:
        lines.append(EMPTY_LIST_TEXT)
        return "\n".join(lines)

    visible = filter_tasks(tasks, search_term)
    if not visible:
        lines.append(EMPTY_SEARCH_TEXT)
        return "\n".join(lines)

    lines.append(f"  {'#':>3}  {'Status':<6}  {'Priority':<8}  {'Due':<10}  Title")
    lines.append(f"  {'-' * 3}  {'-' * 6}  {'-' * 8}  {'-' * 10}  {'-' * TITLE_WIDTH}")
    for index, task in enumerate(visible):
        lines.append(_row(index + 1, task, index == selected_index))

    if selected_index is not None and 0 <= selected_index < len(visible):
        lines.append("")
        lines.append(f"Selected: {visible[selected_index].title}")

    return "\n".join(lines)


def render_details(
    tasks: Sequence[TaskRecord],
    search_term: str,
    selected_index: int | None,
) -> str:
    visible = filter_tasks(tasks, search_term)
    if selected_index is None or not 0 <= selected_index < len(visible):
        return NOTHING_SELECTED_TEXT

    task = visible[selected_index]
    return "\n".join(
        [
            "Task details",
            "",
            f"ID:       {task.id}",
            f"Title:    {task.title}",
            f"Status:   {task.status}",
            f"Priority: {task.priority}",
            f"Due:      {task.due_date or 'not set'}",
            f"Tags:     {', '.join(task.tags) if task.tags else 'none'}",
            "",
            "(press Enter to return to the list)",
        ]
    )


def render_view(
    tasks: Sequence[TaskRecord],
    search_term: str,
    selected_index: int | None,
    mode: ViewMode,
    help_text: str,
) -> str:
    match mode:
        case ViewMode.MAIN:
            return render_main(tasks, search_term, selected_index)
        case ViewMode.DETAILS:
            return render_details(tasks, search_term, selected_index)
        case ViewMode.HELP:
            return help_text + "\n\n(press Enter to return to the list)"


def render_state(state: AppState, help_text: str) -> str:
    return render_view(
        state.store.records,
        state.view.search_term,
        state.view.selected_index,
        state.view.mode,
        help_text,
    )


def render_prompt_context(state: AppState) -> str:
    """`[2/5] Pay rent` line shown above the prompt; empty when nothing is selected."""
    task = state.selected_task()
    if task is None:
        return ""
    position = (state.view.selected_index or 0) + 1
    return f"[{position}/{len(state.filtered())}] {truncate(task.title, PROMPT_TITLE_WIDTH)}"
