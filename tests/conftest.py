# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tododos.core.models import Priority
from tododos.core.state import AppState
from tododos.core.task_store import TaskStore

from .fakes import Collector, FakeGateway


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the console loop.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="tododos",
        log_level="WARNING",
        data_dir=tmp_path / "data",
        spreadsheet_id="",
        credentials_path=tmp_path / "credentials.json",
        worksheet_index=0,
        clear_screen=False,
    )


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def state(settings: SimpleNamespace, gateway: FakeGateway) -> AppState:
    """AppState wired with an in-memory gateway and an empty store."""
    return AppState(settings=settings, store=TaskStore(), gateway=gateway)


@pytest.fixture()
def populated_state(state: AppState) -> AppState:
    state.store.add("Buy milk")
    state.store.add("Pay rent", Priority.HIGH, "2024-03-01", ["bills"])
    state.store.add("Call mom", Priority.LOW)
    state.clamp_selection()
    return state


@pytest.fixture()
def emit() -> Collector:
    return Collector()
