# src/tododos/storage/sheets_gateway.py

from __future__ import annotations

import contextlib
import json
import logging
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import Any

import gspread
from gspread.utils import rowcol_to_a1

from ..core.models import TaskRecord
from ..core.ports import ErrorCategory, PersistenceError
from .rows import HEADER, record_to_row, values_to_records

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
REQUIRED_CREDENTIAL_KEYS = ("client_email", "private_key")

ClientFactory = Callable[[dict[str, Any]], Any]


def _service_account_client(info: dict[str, Any]) -> gspread.Client:
    return gspread.service_account_from_dict(info, scopes=SCOPES)


def _status_code(exc: Exception) -> int | None:
    code = getattr(exc, "code", None)
    if isinstance(code, int):
        return code
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def _is_auth_error(exc: Exception) -> bool:
    return exc.__class__.__name__ in {"RefreshError", "DefaultCredentialsError", "MalformedError"}


def _is_connection_error(exc: Exception) -> bool:
    return exc.__class__.__name__ in {
        "ConnectionError",
        "ConnectTimeout",
        "ReadTimeout",
        "Timeout",
        "TransportError",
        "SSLError",
    }


@contextlib.contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    """Turn gspread / google-auth / transport failures into PersistenceError."""
    try:
        yield
    except PersistenceError:
        raise
    except gspread.exceptions.SpreadsheetNotFound as e:
        raise PersistenceError(ErrorCategory.NOT_FOUND, f"Spreadsheet not found ({action}).") from e
    except gspread.exceptions.WorksheetNotFound as e:
        raise PersistenceError(ErrorCategory.NOT_FOUND, f"Worksheet not found ({action}).") from e
    except gspread.exceptions.APIError as e:
        status = _status_code(e)
        if status == 404:
            category = ErrorCategory.NOT_FOUND
        elif status in (401, 403):
            category = ErrorCategory.PERMISSION
        elif status == 400:
            category = ErrorCategory.BAD_REQUEST
        else:
            category = ErrorCategory.UNKNOWN
        raise PersistenceError(category, f"Google Sheets API error {status} during {action}: {e}") from e
    except Exception as e:
        if _is_auth_error(e):
            raise PersistenceError(ErrorCategory.CREDENTIALS, f"Authentication failed: {e}") from e
        if _is_connection_error(e):
            raise PersistenceError(ErrorCategory.NETWORK, f"Network error during {action}: {e}") from e
        raise PersistenceError(ErrorCategory.UNKNOWN, f"{action} failed: {e}") from e


def friendly_persistence_error_message(err: PersistenceError) -> str:
    msg = str(err).strip() or "Remote store error."
    match err.category:
        case ErrorCategory.NOT_CONFIGURED:
            return (
                "Google Sheets is not configured. Set TODODOS_SPREADSHEET_ID "
                "(and TODODOS_CREDENTIALS_PATH) in .env."
            )
        case ErrorCategory.CREDENTIALS:
            return f"{msg} Check your service account credentials file."
        case ErrorCategory.NOT_FOUND:
            return "Sheet not found. Check TODODOS_SPREADSHEET_ID."
        case ErrorCategory.PERMISSION:
            return "No permission. Share the sheet with the service account email."
        case ErrorCategory.BAD_REQUEST:
            return "Invalid request. Check your credentials file."
        case ErrorCategory.NETWORK:
            return "Network error while talking to Google Sheets. Try again later."
        case ErrorCategory.SCHEMA | ErrorCategory.UNKNOWN:
            return msg


def read_credentials(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise PersistenceError(ErrorCategory.CREDENTIALS, f"Credentials file not found: {path}.")
    try:
        info = json.loads(path.read_text("utf-8"))
    except (OSError, ValueError) as e:
        raise PersistenceError(ErrorCategory.CREDENTIALS, f"Cannot read credentials file {path}: {e}.") from e
    if not isinstance(info, dict):
        raise PersistenceError(ErrorCategory.CREDENTIALS, f"Credentials file {path} is not a JSON object.")
    missing = [k for k in REQUIRED_CREDENTIAL_KEYS if not info.get(k)]
    if missing:
        raise PersistenceError(
            ErrorCategory.CREDENTIALS,
            f"Incomplete credentials file {path}: missing {', '.join(missing)}.",
        )
    return info


class SheetsGateway:
    """
    Mirrors the task list to one worksheet of a Google spreadsheet.

    Row 1 is the header (created on first use when A1 is empty). Every data row
    is one task; columns are matched by header name, so any column order works.
    Save rewrites every data row in full: cells under extra header columns are
    blanked, not preserved.

    The worksheet handle is opened lazily and cached for the session.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_path: str | Path,
        *,
        worksheet_index: int = 0,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._spreadsheet_id = spreadsheet_id
        self._credentials_path = Path(credentials_path)
        self._worksheet_index = worksheet_index
        self._client_factory = client_factory or _service_account_client
        self._worksheet: Any = None
        self._title: str | None = None
        self.service_account: str | None = None

    def describe(self) -> str:
        if self._title:
            return f"Google Sheet '{self._title}'"
        return f"spreadsheet {self._spreadsheet_id}"

    def _open_worksheet(self) -> Any:
        if self._worksheet is not None:
            return self._worksheet

        info = read_credentials(self._credentials_path)
        with _translate_errors("connect"):
            try:
                client = self._client_factory(info)
            except ValueError as e:
                # google-auth rejects malformed private keys with ValueError.
                raise PersistenceError(
                    ErrorCategory.CREDENTIALS, f"Invalid service account key: {e}"
                ) from e
            spreadsheet = client.open_by_key(self._spreadsheet_id)
            worksheet = spreadsheet.get_worksheet(self._worksheet_index)
            if worksheet is None:
                raise PersistenceError(
                    ErrorCategory.NOT_FOUND,
                    f"Worksheet #{self._worksheet_index} does not exist.",
                )
            self._title = str(getattr(spreadsheet, "title", "") or "") or None

        self.service_account = str(info.get("client_email"))
        self._worksheet = worksheet
        logger.info(
            "Connected to spreadsheet=%s title=%r as %s",
            self._spreadsheet_id,
            self._title,
            self.service_account,
        )
        return worksheet

    def _ensure_header(self, worksheet: Any) -> list[str]:
        header = [str(h).strip() for h in worksheet.row_values(1)]
        if not header or not header[0]:
            logger.info("Sheet header missing, writing %s", ",".join(HEADER))
            worksheet.update(values=[list(HEADER)], range_name="A1")
            return list(HEADER)
        if "title" not in header:
            raise PersistenceError(
                ErrorCategory.SCHEMA,
                f"Sheet header has no 'title' column (found: {', '.join(header)}).",
            )
        return header

    def load(self) -> list[TaskRecord]:
        worksheet = self._open_worksheet()
        with _translate_errors("load"):
            header = self._ensure_header(worksheet)
            values = worksheet.get_all_values()
        records = values_to_records(header, values[1:])
        logger.info("Loaded %d tasks from %s", len(records), self.describe())
        return records

    def save(self, records: Sequence[TaskRecord]) -> None:
        worksheet = self._open_worksheet()
        with _translate_errors("save"):
            header = self._ensure_header(worksheet)
            rows = [self._row_for_header(header, task) for task in records]

            last_row = max(int(getattr(worksheet, "row_count", 0) or 0), 2)
            worksheet.batch_clear([f"A2:{rowcol_to_a1(last_row, len(header))}"])
            if rows:
                worksheet.append_rows(rows, value_input_option="RAW")
        logger.info("Saved %d tasks to %s", len(records), self.describe())

    @staticmethod
    def _row_for_header(header: Sequence[str], task: TaskRecord) -> list[str]:
        by_name = dict(zip(HEADER, record_to_row(task)))
        return [by_name.get(name, "") for name in header]
