"""
In-process workbook backend.
Used by the local development server and by the test-suite; rows live in plain lists.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from typing import Any

from src.workbook.base import Workbook, Worksheet, to_cell


class MemoryWorksheet(Worksheet):
    def __init__(self, title: str, rows: Sequence[Sequence[Any]] | None = None) -> None:
        self._title = title
        self._rows: list[list[str]] = [[to_cell(value) for value in row] for row in rows or []]
        self._lock = threading.Lock()

    @property
    def title(self) -> str:
        return self._title

    def get_all_values(self) -> list[list[str]]:
        with self._lock:
            return [list(row) for row in self._rows]

    def append_row(self, values: Sequence[Any]) -> None:
        with self._lock:
            self._rows.append([to_cell(value) for value in values])

    def update_cells(self, row_number: int, col_number: int, values: Sequence[Sequence[Any]]) -> None:
        if row_number < 1 or col_number < 1:
            raise IndexError("Rows and columns are 1-based")
        with self._lock:
            for row_offset, row_values in enumerate(values):
                row_index = row_number - 1 + row_offset
                while len(self._rows) <= row_index:
                    self._rows.append([])
                target = self._rows[row_index]
                for col_offset, value in enumerate(row_values):
                    col_index = col_number - 1 + col_offset
                    if len(target) <= col_index:
                        target.extend([""] * (col_index + 1 - len(target)))
                    target[col_index] = to_cell(value)

    def delete_row(self, row_number: int) -> None:
        with self._lock:
            if row_number < 1 or row_number > len(self._rows):
                raise IndexError(f"Row {row_number} is out of range for {self._title!r}")
            del self._rows[row_number - 1]

    def insert_columns(self, after: int, headers: Sequence[str]) -> None:
        with self._lock:
            for index, row in enumerate(self._rows):
                if len(row) < after:
                    row.extend([""] * (after - len(row)))
                fill = [to_cell(h) for h in headers] if index == 0 else [""] * len(headers)
                row[after:after] = fill


class MemoryWorkbook(Workbook):
    def __init__(self, tabs: Mapping[str, Sequence[Sequence[Any]]] | None = None) -> None:
        self._sheets: dict[str, MemoryWorksheet] = {}
        self._lock = threading.Lock()
        for name, rows in (tabs or {}).items():
            self._sheets[name] = MemoryWorksheet(name, rows)

    def worksheet(self, name: str) -> MemoryWorksheet | None:
        return self._sheets.get(name)

    def worksheets(self) -> list[Worksheet]:
        return list(self._sheets.values())

    def add_worksheet(self, name: str, headers: Sequence[str]) -> MemoryWorksheet:
        with self._lock:
            if name in self._sheets:
                raise ValueError(f"A sheet named {name!r} already exists")
            sheet = MemoryWorksheet(name, [list(headers)])
            self._sheets[name] = sheet
            return sheet
