# src/tododos/storage/offline.py

from __future__ import annotations

from collections.abc import Sequence

from ..core.models import TaskRecord
from ..core.ports import ErrorCategory, PersistenceError


class OfflineGateway:
    """
    Gateway used when no spreadsheet is configured.

    Every call fails with NOT_CONFIGURED so the session runs on the local list only.
    """

    def describe(self) -> str:
        return "no remote store"

    def load(self) -> list[TaskRecord]:
        raise PersistenceError(ErrorCategory.NOT_CONFIGURED, "No spreadsheet configured.")

    def save(self, records: Sequence[TaskRecord]) -> None:
        raise PersistenceError(ErrorCategory.NOT_CONFIGURED, "No spreadsheet configured.")
