# src/tododos/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from .models import TaskRecord, ViewMode
from .ports import PersistenceGateway
from .search import filter_tasks
from .selection import SelectionCursor
from .task_store import TaskStore


@dataclass(slots=True)
class ViewState:
    mode: ViewMode = ViewMode.MAIN
    search_term: str = ""
    cursor: SelectionCursor = field(default_factory=SelectionCursor)

    @property
    def selected_index(self) -> int | None:
        return self.cursor.index


@dataclass
class AppState:
    # Settings object (config.Settings or a test namespace).
    settings: object

    store: TaskStore
    gateway: PersistenceGateway
    view: ViewState = field(default_factory=ViewState)

    def filtered(self) -> list[TaskRecord]:
        return filter_tasks(self.store.records, self.view.search_term)

    def clamp_selection(self) -> None:
        self.view.cursor.clamp(len(self.filtered()))

    def selected_task(self) -> TaskRecord | None:
        index = self.view.selected_index
        view = self.filtered()
        if index is None or not 0 <= index < len(view):
            return None
        return view[index]

    def selected_store_index(self) -> int | None:
        """Translate the filtered-view selection into a TaskStore index."""
        task = self.selected_task()
        if task is None:
            return None
        return self.store.index_of(task)

    def set_search(self, term: str) -> None:
        self.view.search_term = term.strip()
        self.clamp_selection()
