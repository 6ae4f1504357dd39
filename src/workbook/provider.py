"""
Resolve which workbook a request operates on.
Lookup order: an explicit `sheetUrl` request parameter, the configured default URL, then the URL
saved in the property store. The memory backend ignores URLs and serves one shared workbook.
"""

from __future__ import annotations

import threading

from src.common.property_store import SPREADSHEET_URL_PROPERTY, PropertyStore
from src.workbook.base import Workbook, WorkbookUnavailableError
from src.workbook.bootstrap import setup_workbook
from src.workbook.memory import MemoryWorkbook

MISSING_WORKBOOK_MESSAGE = (
    "Could not open spreadsheet. Pass ?sheetUrl=YOUR_SHEET_URL or set SPREADSHEET_URL "
    "in the server configuration."
)


class WorkbookProvider:
    def __init__(
        self,
        *,
        backend: str,
        properties: PropertyStore,
        default_url: str = "",
        credentials_path: str | None = None,
        memory_workbook: MemoryWorkbook | None = None,
        google_opener=None,
    ) -> None:
        self.backend = backend
        self._properties = properties
        self._default_url = default_url
        self._credentials_path = credentials_path
        self._memory = memory_workbook
        self._opener = google_opener
        self._lock = threading.Lock()

    def resolve_url(self, sheet_url: str | None = None) -> str:
        return (
            (sheet_url or "").strip()
            or self._default_url.strip()
            or self._properties.get(SPREADSHEET_URL_PROPERTY).strip()
        )

    def open(self, sheet_url: str | None = None) -> Workbook:
        if self.backend == "memory":
            return self._memory_workbook()

        url = self.resolve_url(sheet_url)
        if not url:
            raise WorkbookUnavailableError(MISSING_WORKBOOK_MESSAGE)
        return self._google_opener().open(url)

    def _memory_workbook(self) -> MemoryWorkbook:
        with self._lock:
            if self._memory is None:
                self._memory = MemoryWorkbook()
                setup_workbook(self._memory)
            return self._memory

    def _google_opener(self):
        with self._lock:
            if self._opener is None:
                # google backend only
                from src.workbook.google import GoogleWorkbookOpener

                self._opener = GoogleWorkbookOpener(credentials_path=self._credentials_path)
            return self._opener
