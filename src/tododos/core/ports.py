# src/tododos/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the remote store and the terminal swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from enum import StrEnum
from typing import Protocol

from .models import TaskRecord

Ask = Callable[[str], str]
# Ask one question, get the raw answer line (console: input()).

Emit = Callable[[str], None]
# Immediate user-visible feedback line (dialog warnings etc).


class ErrorCategory(StrEnum):
    NOT_CONFIGURED = "not_configured"
    CREDENTIALS = "credentials"
    NOT_FOUND = "not_found"
    PERMISSION = "permission"
    BAD_REQUEST = "bad_request"
    NETWORK = "network"
    SCHEMA = "schema"
    UNKNOWN = "unknown"


class PersistenceError(RuntimeError):
    """Gateway failure. Never fatal: the session keeps its in-memory list."""

    def __init__(self, category: ErrorCategory, message: str) -> None:
        super().__init__(message)
        self.category = category


class PersistenceGateway(Protocol):
    """
    Row-oriented remote store.

    load() returns every stored task in order; save() replaces all data rows.
    Both raise PersistenceError on failure.
    """

    def load(self) -> list[TaskRecord]: ...

    def save(self, records: Sequence[TaskRecord]) -> None: ...

    def describe(self) -> str: ...
