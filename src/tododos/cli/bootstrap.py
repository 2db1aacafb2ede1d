# src/tododos/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- picks the persistence gateway (Google Sheets or offline),
- wires TaskStore + ViewState into AppState,
- performs the startup load (never fatal).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Emit, PersistenceError, PersistenceGateway
from ..core.state import AppState
from ..core.task_store import TaskStore
from ..storage.offline import OfflineGateway
from ..storage.sheets_gateway import SheetsGateway, friendly_persistence_error_message

logger = logging.getLogger(__name__)


def build_gateway(settings) -> PersistenceGateway:
    if not getattr(settings, "spreadsheet_id", ""):
        logger.info("No spreadsheet configured; running offline.")
        return OfflineGateway()
    return SheetsGateway(
        settings.spreadsheet_id,
        settings.credentials_path,
        worksheet_index=getattr(settings, "worksheet_index", 0),
    )


def create_initial_state(*, settings=None, gateway: PersistenceGateway | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings/gateway injectable makes the app easier to test and avoids hidden global
    config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if gateway is None:
        gateway = build_gateway(settings)

    return AppState(settings=settings, store=TaskStore(), gateway=gateway)


def load_initial_tasks(state: AppState, emit: Emit) -> bool:
    """
    Hydrate the store from the gateway. On failure the list stays empty and the
    session continues without remote persistence.
    """
    emit(f"Loading tasks from {state.gateway.describe()}...")
    try:
        records = state.gateway.load()
    except PersistenceError as e:
        logger.warning("Startup load failed (%s): %s", e.category, e)
        emit(friendly_persistence_error_message(e))
        emit("You can keep working, but changes will not be saved remotely.")
        state.store.replace_all([])
        state.clamp_selection()
        return False

    state.store.replace_all(records)
    state.clamp_selection()
    if records:
        emit(f"Loaded {len(records)} tasks from {state.gateway.describe()}.")
    else:
        emit("The sheet is empty - ready for new tasks.")
    return True
