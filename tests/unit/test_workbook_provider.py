"""
Unit tests for workbook resolution and the Google Sheets adapter.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from pathlib import Path
from typing import Any

import gspread
import pytest
import requests
from google.auth.exceptions import DefaultCredentialsError

from src.common.property_store import SPREADSHEET_URL_PROPERTY, PropertyStore
from src.workbook.base import WorkbookUnavailableError
from src.workbook.google import GoogleWorkbook, GoogleWorkbookOpener, GoogleWorksheet
from src.workbook.layout import MINISTRIES_SHEET
from src.workbook.provider import MISSING_WORKBOOK_MESSAGE, WorkbookProvider


class _FakeGspreadWorksheet:
    def __init__(self, title: str) -> None:
        self.title = title
        self.calls: list[tuple[str, Any, dict[str, Any]]] = []

    def append_row(self, values: list[str], **kwargs: Any) -> None:
        self.calls.append(("append_row", values, kwargs))

    def update(self, **kwargs: Any) -> None:
        self.calls.append(("update", None, kwargs))

    def delete_rows(self, row_number: int) -> None:
        self.calls.append(("delete_rows", row_number, {}))


class _FakeSpreadsheet:
    def __init__(self, titles: list[str]) -> None:
        self._sheets = {title: _FakeGspreadWorksheet(title) for title in titles}

    def worksheet(self, name: str) -> _FakeGspreadWorksheet:
        if name not in self._sheets:
            raise gspread.WorksheetNotFound(name)
        return self._sheets[name]


def test_resolve_url_prefers_request_then_default_then_stored(tmp_path: Path) -> None:
    properties = PropertyStore(tmp_path)
    properties.set(SPREADSHEET_URL_PROPERTY, "https://stored")

    assert WorkbookProvider(backend="google", properties=properties).resolve_url() == "https://stored"
    provider = WorkbookProvider(backend="google", properties=properties, default_url="https://default")
    assert provider.resolve_url() == "https://default"
    assert provider.resolve_url("  https://request ") == "https://request"


def test_google_backend_without_url_is_unavailable(tmp_path: Path) -> None:
    provider = WorkbookProvider(backend="google", properties=PropertyStore(tmp_path))

    with pytest.raises(WorkbookUnavailableError, match="Could not open spreadsheet"):
        provider.open()
    assert "sheetUrl" in MISSING_WORKBOOK_MESSAGE


def test_memory_backend_creates_one_shared_seeded_workbook(tmp_path: Path) -> None:
    provider = WorkbookProvider(backend="memory", properties=PropertyStore(tmp_path))

    first = provider.open()
    second = provider.open("https://ignored")

    assert first is second
    assert first.worksheet(MINISTRIES_SHEET).row_count > 1


def test_google_worksheet_writes_raw_cell_text() -> None:
    raw = _FakeGspreadWorksheet("App Signups")
    sheet = GoogleWorksheet(raw)

    sheet.append_row(["Ann", None, True, 3])
    sheet.update_cells(2, 9, [["Signup"]])
    sheet.delete_row(4)

    assert raw.calls[0] == ("append_row", ["Ann", "", "TRUE", "3"], {"value_input_option": "RAW"})
    assert raw.calls[1][2] == {"values": [["Signup"]], "range_name": "I2", "value_input_option": "RAW"}
    assert raw.calls[2] == ("delete_rows", 4, {})


def test_google_workbook_missing_tab_is_none() -> None:
    workbook = GoogleWorkbook(_FakeSpreadsheet([MINISTRIES_SHEET]))

    assert workbook.worksheet("Admins") is None
    assert workbook.worksheet(MINISTRIES_SHEET).title == MINISTRIES_SHEET


SHEET_URL = "https://docs.google.com/spreadsheets/d/abc123/edit"


def _api_error(status: int) -> gspread.exceptions.APIError:
    response = requests.Response()
    response.status_code = status
    response._content = (
        b'{"error": {"code": %d, "message": "denied", "status": "PERMISSION_DENIED"}}' % status
    )
    return gspread.exceptions.APIError(response)


class _FailingClient:
    def __init__(self, error: Exception) -> None:
        self.error = error
        self.opened: list[str] = []

    def open_by_url(self, url: str) -> Any:
        self.opened.append(url)
        raise self.error


class _UnreachableSpreadsheet:
    def fetch_sheet_metadata(self) -> None:
        raise requests.ConnectionError("connection reset")


@pytest.mark.parametrize(
    "error",
    [
        PermissionError("The caller does not have permission"),
        _api_error(403),
        gspread.SpreadsheetNotFound("not found"),
        gspread.NoValidUrlKeyFound(),
        requests.ConnectionError("connection reset"),
    ],
    ids=["not-shared", "api-error", "not-found", "bad-url", "network"],
)
def test_google_opener_reports_open_failures_as_unavailable(error: Exception) -> None:
    client = _FailingClient(error)
    opener = GoogleWorkbookOpener(client=client)

    with pytest.raises(WorkbookUnavailableError, match="Could not open spreadsheet at") as excinfo:
        opener.open(SHEET_URL)

    assert excinfo.value.__cause__ is error
    assert client.opened == [SHEET_URL]


def test_google_opener_reports_missing_credentials_as_unavailable() -> None:
    def no_credentials(credentials_path: str | None) -> Any:
        raise DefaultCredentialsError("Your default credentials were not found.")

    opener = GoogleWorkbookOpener(credentials_factory=no_credentials)

    with pytest.raises(WorkbookUnavailableError):
        opener.open(SHEET_URL)


def test_provider_surfaces_google_failures_as_unavailable(tmp_path: Path) -> None:
    provider = WorkbookProvider(
        backend="google",
        properties=PropertyStore(tmp_path),
        default_url=SHEET_URL,
        google_opener=GoogleWorkbookOpener(client=_FailingClient(PermissionError("forbidden"))),
    )

    with pytest.raises(WorkbookUnavailableError):
        provider.open()


def test_google_workbook_cannot_connect_on_network_error() -> None:
    assert GoogleWorkbook(_UnreachableSpreadsheet()).can_connect() is False
