"""
Read ministries from a tab that follows the app's own column layout.
Question cells use a small pipe syntax, `type|label|opt1,opt2`, so organizers can define
select, checkbox, and free-text questions straight from the spreadsheet.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from src.ministries.column_detection import read_detected_format
from src.workbook.base import cell
from src.workbook.layout import (
    DEFAULT_ICON,
    MINISTRY_FIRST_QUESTION_COL,
    MINISTRY_TAGS_COL,
    QUESTION_SLOTS,
)

FORMAT_STANDARD = "standard"
FORMAT_EMPTY = "empty"


def normalize_header(value: Any) -> str:
    return str(value or "").strip().lower()


def is_standard_format(headers: Sequence[Any]) -> bool:
    """A tab is standard when it starts with ID, Name (or ID, _, Description)."""

    normalized = [normalize_header(h) for h in headers]
    first = cell(normalized, 0)
    return first == "id" and (cell(normalized, 1) == "name" or cell(normalized, 2) == "description")


def split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def parse_question(raw: str, position: int) -> dict[str, Any]:
    """Parse a `type|label|options` cell into a question definition.

    A cell without a pipe is a free-text question whose label is the whole cell.
    """

    parts = raw.split("|")
    if len(parts) > 1:
        question_type = parts[0] or "text"
        label = parts[1]
    else:
        question_type = "text"
        label = parts[0]
    options_raw = parts[2] if len(parts) > 2 else ""
    options = [item.strip() for item in options_raw.split(",")] if options_raw else []
    return {
        "id": f"q{position}",
        "type": question_type,
        "label": label,
        "options": options,
    }


def parse_ministry_row(row: Sequence[str]) -> dict[str, Any]:
    ministry: dict[str, Any] = {
        "id": cell(row, 0),
        "name": cell(row, 1),
        "description": cell(row, 2),
        "icon": cell(row, 3) or DEFAULT_ICON,
        "organizerName": cell(row, 4),
        "organizerEmail": cell(row, 5),
        "organizerPhone": cell(row, 6),
        "questions": [],
    }
    tags = cell(row, MINISTRY_TAGS_COL)
    if tags:
        ministry["tags"] = split_list(tags)
    for offset in range(QUESTION_SLOTS):
        question = cell(row, MINISTRY_FIRST_QUESTION_COL + offset)
        if question:
            ministry["questions"].append(parse_question(question, offset + 1))
    return ministry


def read_standard_format(rows: Sequence[Sequence[str]]) -> dict[str, Any]:
    ministries = [parse_ministry_row(row) for row in rows[1:] if cell(row, 0)]
    return {"ministries": ministries, "format": FORMAT_STANDARD}


def read_ministries(rows: Sequence[Sequence[str]]) -> dict[str, Any]:
    """Read a ministry list from any tab, picking the standard or detected reader."""

    if len(rows) < 2:
        return {"ministries": [], "format": FORMAT_EMPTY}
    if is_standard_format(rows[0]):
        return read_standard_format(rows)
    return read_detected_format(rows)
