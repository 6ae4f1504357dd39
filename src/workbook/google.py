"""
Google Sheets workbook backend built on gspread.
Credentials come from a service-account key file when one is configured, otherwise from
application-default credentials; the spreadsheet must be shared with that account.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from typing import Any

import gspread
import requests
from google.auth import default as google_auth_default
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from gspread.utils import rowcol_to_a1

from src.workbook.base import Workbook, WorkbookUnavailableError, Worksheet, to_cell

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive.readonly",
]
HEADER_FORMAT = {
    "textFormat": {"bold": True, "foregroundColor": {"red": 1.0, "green": 1.0, "blue": 1.0}},
    "backgroundColor": {"red": 0.545, "green": 0.149, "blue": 0.208},
}
# gspread 6 raises the builtin PermissionError on HTTP 403 (sheet not shared with the account).
OPEN_ERRORS = (
    gspread.exceptions.GSpreadException,
    PermissionError,
    GoogleAuthError,
    requests.RequestException,
)


def build_credentials(credentials_path: str | None = None):
    key_path = credentials_path or os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
    if key_path and os.path.exists(key_path):
        return service_account.Credentials.from_service_account_file(key_path, scopes=SCOPES)
    creds, _ = google_auth_default(scopes=SCOPES)
    return creds


class GoogleWorksheet(Worksheet):
    def __init__(self, worksheet: gspread.Worksheet) -> None:
        self._ws = worksheet

    @property
    def title(self) -> str:
        return self._ws.title

    def get_all_values(self) -> list[list[str]]:
        return self._ws.get_all_values()

    def append_row(self, values: Sequence[Any]) -> None:
        self._ws.append_row([to_cell(value) for value in values], value_input_option="RAW")

    def update_cells(self, row_number: int, col_number: int, values: Sequence[Sequence[Any]]) -> None:
        self._ws.update(
            values=[[to_cell(value) for value in row] for row in values],
            range_name=rowcol_to_a1(row_number, col_number),
            value_input_option="RAW",
        )

    def delete_row(self, row_number: int) -> None:
        self._ws.delete_rows(row_number)

    def insert_columns(self, after: int, headers: Sequence[str]) -> None:
        self._ws.insert_cols([[header] for header in headers], col=after + 1)
        start = rowcol_to_a1(1, after + 1)
        end = rowcol_to_a1(1, after + len(headers))
        self._ws.format(f"{start}:{end}", HEADER_FORMAT)


class GoogleWorkbook(Workbook):
    def __init__(self, spreadsheet: gspread.Spreadsheet) -> None:
        self._spreadsheet = spreadsheet

    def worksheet(self, name: str) -> GoogleWorksheet | None:
        try:
            return GoogleWorksheet(self._spreadsheet.worksheet(name))
        except gspread.WorksheetNotFound:
            return None

    def worksheets(self) -> list[Worksheet]:
        return [GoogleWorksheet(ws) for ws in self._spreadsheet.worksheets()]

    def add_worksheet(self, name: str, headers: Sequence[str]) -> GoogleWorksheet:
        ws = self._spreadsheet.add_worksheet(title=name, rows=1000, cols=max(len(headers), 26))
        ws.append_row(list(headers), value_input_option="RAW")
        ws.format(f"A1:{rowcol_to_a1(1, len(headers))}", HEADER_FORMAT)
        ws.freeze(rows=1)
        logger.info("Created sheet %r with %d columns", name, len(headers))
        return GoogleWorksheet(ws)

    def can_connect(self) -> bool:
        try:
            self._spreadsheet.fetch_sheet_metadata()
            return True
        except OPEN_ERRORS as exc:
            logger.warning("Spreadsheet metadata fetch failed: %s", exc)
            return False


class GoogleWorkbookOpener:
    """Open spreadsheets by URL with one shared authorized client.

    Every failure while authorizing or opening (missing credentials, a sheet not shared with the
    account, a bad URL, network errors) surfaces as `WorkbookUnavailableError`.
    """

    def __init__(
        self,
        *,
        credentials_path: str | None = None,
        credentials_factory: Callable[[str | None], Any] = build_credentials,
        client: Any | None = None,
    ) -> None:
        self._credentials_path = credentials_path
        self._credentials_factory = credentials_factory
        self._client = client

    def _get_client(self) -> gspread.Client:
        if self._client is None:
            self._client = gspread.authorize(self._credentials_factory(self._credentials_path))
        return self._client

    def open(self, url: str) -> GoogleWorkbook:
        try:
            return GoogleWorkbook(self._get_client().open_by_url(url))
        except OPEN_ERRORS as exc:
            logger.warning("Could not open spreadsheet %s: %s: %s", url, type(exc).__name__, exc)
            raise WorkbookUnavailableError(f"Could not open spreadsheet at {url}") from exc
