# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from tododos.config import Settings


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (
        "APP_NAME",
        "LOG_LEVEL",
        "DATA_DIR",
        "SPREADSHEET_ID",
        "CREDENTIALS_PATH",
        "WORKSHEET_INDEX",
        "CLEAR_SCREEN",
    ):
        monkeypatch.delenv(f"TODODOS_{name}", raising=False)
    return monkeypatch


def test_defaults_run_offline(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()
    assert s.app_name == "tododos"
    assert s.log_level == "WARNING"
    assert s.spreadsheet_id == ""
    assert s.credentials_path == Path("credentials.json")
    assert s.worksheet_index == 0
    assert s.clear_screen is True


def test_env_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("TODODOS_SPREADSHEET_ID", "  abc123 ")
    clean_env.setenv("TODODOS_CREDENTIALS_PATH", str(tmp_path / "sa.json"))
    clean_env.setenv("TODODOS_WORKSHEET_INDEX", "2")
    clean_env.setenv("TODODOS_CLEAR_SCREEN", "off")
    clean_env.setenv("TODODOS_DATA_DIR", str(tmp_path / "logs"))

    s = Settings.from_env()
    assert s.spreadsheet_id == "abc123"
    assert s.credentials_path == tmp_path / "sa.json"
    assert s.worksheet_index == 2
    assert s.clear_screen is False
    assert s.data_dir == tmp_path / "logs"


def test_bad_numbers_fall_back_to_defaults(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TODODOS_WORKSHEET_INDEX", "first")
    assert Settings.from_env().worksheet_index == 0
    clean_env.setenv("TODODOS_WORKSHEET_INDEX", "-3")
    assert Settings.from_env().worksheet_index == 0
