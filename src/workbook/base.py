"""
Backend-neutral spreadsheet interfaces.
Services only talk to `Workbook` and `Worksheet`, so the Google Sheets backend and the
in-memory backend used for local runs and tests are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class WorkbookUnavailableError(RuntimeError):
    """Raised when no spreadsheet can be opened for a request."""


def to_cell(value: Any) -> str:
    """Normalize a Python value into the string form stored in a cell."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


def cell(row: Sequence[str], index: int) -> str:
    """Return the cell at `index`, treating ragged/missing cells as empty."""

    if index < 0 or index >= len(row):
        return ""
    return row[index]


class Worksheet(ABC):
    """One tab of a workbook."""

    @property
    @abstractmethod
    def title(self) -> str: ...

    @abstractmethod
    def get_all_values(self) -> list[list[str]]:
        """Return every populated row, header first."""

    @abstractmethod
    def append_row(self, values: Sequence[Any]) -> None: ...

    @abstractmethod
    def update_cells(self, row_number: int, col_number: int, values: Sequence[Sequence[Any]]) -> None:
        """Overwrite a block starting at 1-based (`row_number`, `col_number`)."""

    @abstractmethod
    def delete_row(self, row_number: int) -> None:
        """Delete the 1-based row; the header is row 1."""

    @abstractmethod
    def insert_columns(self, after: int, headers: Sequence[str]) -> None:
        """Insert blank columns after 1-based column `after`, labelled with `headers`."""

    def update_row(self, row_number: int, values: Sequence[Any]) -> None:
        self.update_cells(row_number, 1, [list(values)])

    @property
    def row_count(self) -> int:
        return len(self.get_all_values())

    @property
    def col_count(self) -> int:
        return max((len(row) for row in self.get_all_values()), default=0)


class Workbook(ABC):
    """A spreadsheet file holding named tabs."""

    @abstractmethod
    def worksheet(self, name: str) -> Worksheet | None:
        """Return the tab called `name`, or None when it does not exist."""

    @abstractmethod
    def worksheets(self) -> list[Worksheet]: ...

    @abstractmethod
    def add_worksheet(self, name: str, headers: Sequence[str]) -> Worksheet:
        """Create a tab whose first row is `headers`."""

    def can_connect(self) -> bool:
        return True


def get_or_create_sheet(workbook: Workbook, name: str, headers: Sequence[str]) -> Worksheet:
    """Return the existing tab or create it with a header row. Existing tabs are left untouched."""

    sheet = workbook.worksheet(name)
    if sheet is None:
        sheet = workbook.add_worksheet(name, headers)
    return sheet
