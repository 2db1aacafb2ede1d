# src/tododos/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time: without a spreadsheet id the app runs offline.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODODOS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Google Sheets ----
    spreadsheet_id: str
    credentials_path: Path
    worksheet_index: int

    # ---- Console ----
    clear_screen: bool

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "tododos") or "tododos",
            # Console level only; the log file always gets DEBUG.
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/tododos")),
            spreadsheet_id=_env(_k("SPREADSHEET_ID"), "").strip(),
            credentials_path=_env_path(_k("CREDENTIALS_PATH"), Path("credentials.json")),
            worksheet_index=max(0, _env_int(_k("WORKSHEET_INDEX"), 0)),
            clear_screen=_env_bool(_k("CLEAR_SCREEN"), True),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env once (without overriding the real environment) and cache Settings."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
