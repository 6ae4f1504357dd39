"""
Rank workbook tabs by how likely each one is to hold the parish's ministry list.
Used by the admin setup flow to suggest which tab to read when the workbook has no `Ministries` tab yet.
"""

from __future__ import annotations

from typing import Any

from src.ministries.column_detection import EMAIL_PATTERN
from src.workbook.base import Workbook, cell
from src.workbook.layout import APP_MANAGED_SHEETS, MINISTRIES_SHEET

# Ordered: matchedFields follows this order.
HEADER_KEYWORDS: dict[str, tuple[str, ...]] = {
    "name": ("name", "ministry", "ministry name", "group", "group name", "organization", "team"),
    "description": ("description", "desc", "about", "details", "summary", "what we do", "purpose", "mission"),
    "contact": ("contact", "organizer", "leader", "lead", "coordinator", "chair", "head", "director"),
    "email": ("email", "e-mail", "contact email", "organizer email", "leader email"),
    "phone": ("phone", "telephone", "cell", "mobile", "contact phone", "number"),
    "icon": ("icon", "emoji", "symbol"),
    "id": ("id", "slug", "key", "code"),
}
HEADER_WEIGHTS = {"name": 20, "description": 15}
DEFAULT_HEADER_WEIGHT = 5

TAB_NAME_KEYWORDS = (
    "ministr",
    "group",
    "organization",
    "team",
    "committee",
    "list",
    "master",
    "all",
    "table",
    "contact",
    "director",
)
TAB_NAME_BONUS = 10
EXACT_TAB_BONUS = 30
EMAIL_ROWS_THRESHOLD = 3
EMAIL_ROWS_BONUS = 15
ROW_COUNT_BONUSES = ((5, 10), (10, 10), (20, 5))

SAMPLE_ROWS = 5
PREVIEW_COLUMNS = 5
PREVIEW_ROWS = 3
PREVIEW_CELL_CHARS = 60


def score_headers(headers: list[str]) -> tuple[int, list[str]]:
    score = 0
    matched: list[str] = []
    for field, keywords in HEADER_KEYWORDS.items():
        if any(keyword in header for header in headers for keyword in keywords):
            score += HEADER_WEIGHTS.get(field, DEFAULT_HEADER_WEIGHT)
            matched.append(field)
    return score, matched


def row_count_bonus(row_count: int) -> int:
    return sum(bonus for threshold, bonus in ROW_COUNT_BONUSES if row_count >= threshold)


def count_email_rows(sample: list[list[str]]) -> int:
    return sum(1 for row in sample if any(EMAIL_PATTERN.match(value.strip()) for value in row))


def tab_name_bonus(name: str) -> int:
    lowered = name.lower()
    bonus = TAB_NAME_BONUS if any(keyword in lowered for keyword in TAB_NAME_KEYWORDS) else 0
    if name == MINISTRIES_SHEET:
        bonus += EXACT_TAB_BONUS
    return bonus


def score_sheet(name: str, rows: list[list[str]]) -> dict[str, Any] | None:
    """Score one tab; returns None for tabs without a header and at least one data row."""

    col_count = max((len(row) for row in rows), default=0)
    if len(rows) < 2 or col_count < 1:
        return None

    headers = [str(cell(rows[0], index)).strip().lower() for index in range(col_count)]
    row_count = len(rows) - 1
    sample = rows[1 : 1 + SAMPLE_ROWS]

    score, matched_fields = score_headers(headers)
    score += row_count_bonus(row_count)
    if count_email_rows(sample) >= EMAIL_ROWS_THRESHOLD:
        score += EMAIL_ROWS_BONUS
    score += tab_name_bonus(name)

    preview_cols = min(col_count, PREVIEW_COLUMNS)
    preview = [
        [cell(row, index)[:PREVIEW_CELL_CHARS] for index in range(preview_cols)]
        for row in sample[:PREVIEW_ROWS]
    ]
    return {
        "name": name,
        "rowCount": row_count,
        "colCount": col_count,
        "score": score,
        "matchedFields": matched_fields,
        "headers": headers[:preview_cols],
        "preview": preview,
    }


def scan_workbook(workbook: Workbook) -> dict[str, Any]:
    candidates = []
    for worksheet in workbook.worksheets():
        if worksheet.title in APP_MANAGED_SHEETS:
            continue
        candidate = score_sheet(worksheet.title, worksheet.get_all_values())
        if candidate is not None:
            candidates.append(candidate)

    # sorted() is stable, so equal scores keep workbook order.
    candidates = sorted(candidates, key=lambda item: item["score"], reverse=True)
    return {
        "sheets": candidates,
        "recommended": candidates[0]["name"] if candidates else None,
    }
