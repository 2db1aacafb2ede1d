# tests/test_sheets_gateway.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tododos.core.models import Priority, TaskRecord, TaskStatus
from tododos.core.ports import ErrorCategory, PersistenceError
from tododos.storage.offline import OfflineGateway
from tododos.storage.rows import HEADER, record_to_row, values_to_records
from tododos.storage.sheets_gateway import SheetsGateway, friendly_persistence_error_message


class FakeWorksheet:
    """Just enough of gspread.Worksheet for the gateway: a 2D list of strings."""

    def __init__(self, values: list[list[str]] | None = None) -> None:
        self.values = [list(r) for r in (values or [])]
        self.row_count = 1000
        self.cleared: list[list[str]] = []

    def row_values(self, row: int) -> list[str]:
        return list(self.values[row - 1]) if len(self.values) >= row else []

    def get_all_values(self) -> list[list[str]]:
        return [list(r) for r in self.values]

    def update(self, values=None, range_name=None, **kwargs) -> None:
        assert range_name == "A1"
        if self.values:
            self.values[0] = list(values[0])
        else:
            self.values.append(list(values[0]))

    def batch_clear(self, ranges: list[str]) -> None:
        self.cleared.append(ranges)
        del self.values[1:]

    def append_rows(self, rows, value_input_option=None, **kwargs) -> None:
        assert value_input_option == "RAW"
        self.values.extend(list(r) for r in rows)


class FakeSpreadsheet:
    title = "Todo"

    def __init__(self, worksheet: FakeWorksheet | None) -> None:
        self.worksheet = worksheet

    def get_worksheet(self, index: int):
        return self.worksheet if index == 0 else None


class FakeClient:
    def __init__(self, spreadsheet: FakeSpreadsheet) -> None:
        self.spreadsheet = spreadsheet
        self.opened: list[str] = []

    def open_by_key(self, key: str) -> FakeSpreadsheet:
        self.opened.append(key)
        return self.spreadsheet


@pytest.fixture()
def credentials(tmp_path: Path) -> Path:
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({"client_email": "bot@example.iam", "private_key": "KEY"}), "utf-8")
    return path


def _gateway(credentials: Path, worksheet: FakeWorksheet | None, *, index: int = 0) -> tuple[SheetsGateway, FakeClient]:
    client = FakeClient(FakeSpreadsheet(worksheet))
    gateway = SheetsGateway("sheet-id", credentials, worksheet_index=index, client_factory=lambda info: client)
    return gateway, client


def test_row_mapping_by_header_name_and_legacy_values() -> None:
    header = ["tags", "title", "status", "priority", "dueDate", "notes"]
    values = [
        ["a, b,,", "Buy milk", "erledigt", "hoch", "2024-03-01", "ignored"],
        ["", "", "", "", "", ""],
        ["", "", "offen", "niedrig", "", ""],
        ["x"],
    ]
    records = values_to_records(header, values)

    assert [r.id for r in records] == [1, 2, 3]
    assert records[0] == TaskRecord(
        id=1,
        title="Buy milk",
        status=TaskStatus.DONE,
        priority=Priority.HIGH,
        due_date="2024-03-01",
        tags=["a", "b"],
    )
    assert records[1].title == "No description"
    assert (records[1].status, records[1].priority) == (TaskStatus.OPEN, Priority.LOW)
    assert records[2].tags == ["x"] and records[2].title == "No description"


def test_record_to_row_joins_tags() -> None:
    task = TaskRecord(id=1, title="Pay rent", priority=Priority.HIGH, due_date="2024-03-01", tags=["bills", "home"])
    assert record_to_row(task) == ["Pay rent", "open", "high", "2024-03-01", "bills,home"]


def test_load_creates_missing_header(credentials: Path) -> None:
    worksheet = FakeWorksheet()
    gateway, client = _gateway(credentials, worksheet)

    assert gateway.load() == []
    assert worksheet.values[0] == list(HEADER)
    assert client.opened == ["sheet-id"]
    assert gateway.describe() == "Google Sheet 'Todo'"
    assert gateway.service_account == "bot@example.iam"


def test_save_replaces_data_rows_and_keeps_header(credentials: Path) -> None:
    worksheet = FakeWorksheet(
        [
            ["title", "status", "priority", "dueDate", "tags"],
            ["Old", "open", "normal", "", ""],
            ["Older", "done", "low", "", ""],
        ]
    )
    gateway, _ = _gateway(credentials, worksheet)

    tasks = [
        TaskRecord(id=1, title="Pay rent", priority=Priority.HIGH, due_date="2024-03-01", tags=["bills"]),
        TaskRecord(id=2, title="Buy milk", status=TaskStatus.DONE),
    ]
    gateway.save(tasks)
    gateway.save(tasks)

    assert worksheet.values == [
        ["title", "status", "priority", "dueDate", "tags"],
        ["Pay rent", "open", "high", "2024-03-01", "bills"],
        ["Buy milk", "done", "normal", "", ""],
    ]
    assert worksheet.cleared[0] == ["A2:E1000"]
    assert gateway.load() == tasks


def test_save_follows_column_order_and_blanks_extra_cells(credentials: Path) -> None:
    worksheet = FakeWorksheet([["tags", "title", "extra"], ["", "T", "keep me?"]])
    gateway, _ = _gateway(credentials, worksheet)
    gateway.save([TaskRecord(id=1, title="T", tags=["a", "b"])])
    assert worksheet.cleared == [["A2:C1000"]]
    assert worksheet.values == [["tags", "title", "extra"], ["a,b", "T", ""]]


def test_save_with_no_tasks_only_clears(credentials: Path) -> None:
    worksheet = FakeWorksheet([list(HEADER), ["Old", "open", "normal", "", ""]])
    gateway, _ = _gateway(credentials, worksheet)
    gateway.save([])
    assert worksheet.values == [list(HEADER)]


def test_header_without_title_is_a_schema_error(credentials: Path) -> None:
    gateway, _ = _gateway(credentials, FakeWorksheet([["name", "state"]]))
    with pytest.raises(PersistenceError) as exc:
        gateway.load()
    assert exc.value.category is ErrorCategory.SCHEMA


def test_missing_worksheet_is_not_found(credentials: Path) -> None:
    gateway, _ = _gateway(credentials, FakeWorksheet(), index=3)
    with pytest.raises(PersistenceError) as exc:
        gateway.load()
    assert exc.value.category is ErrorCategory.NOT_FOUND


@pytest.mark.parametrize(
    "content",
    [None, "not json", json.dumps(["list"]), json.dumps({"client_email": "bot@example.iam"})],
)
def test_bad_credentials_file(tmp_path: Path, content: str | None) -> None:
    path = tmp_path / "credentials.json"
    if content is not None:
        path.write_text(content, "utf-8")
    gateway, client = _gateway(path, FakeWorksheet())

    with pytest.raises(PersistenceError) as exc:
        gateway.load()
    assert exc.value.category is ErrorCategory.CREDENTIALS
    assert client.opened == []


def test_transport_errors_are_categorized(credentials: Path) -> None:
    class ConnectionError(Exception):
        pass

    class BrokenWorksheet(FakeWorksheet):
        def get_all_values(self):
            raise ConnectionError("connection refused")

    gateway, _ = _gateway(credentials, BrokenWorksheet([list(HEADER)]))
    with pytest.raises(PersistenceError) as exc:
        gateway.load()
    assert exc.value.category is ErrorCategory.NETWORK
    assert "Network error" in friendly_persistence_error_message(exc.value)


def test_offline_gateway_is_not_configured() -> None:
    gateway = OfflineGateway()
    for call in (gateway.load, lambda: gateway.save([])):
        with pytest.raises(PersistenceError) as exc:
            call()
        assert exc.value.category is ErrorCategory.NOT_CONFIGURED
        assert "TODODOS_SPREADSHEET_ID" in friendly_persistence_error_message(exc.value)
