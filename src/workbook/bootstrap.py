"""
Workbook setup and in-place schema migrations.
`setup_workbook` creates every tab the app needs (seeding example ministries on first run);
the migrations upgrade tabs created by older releases that lacked newer columns.
"""

from __future__ import annotations

import logging

from src.workbook.base import Workbook, cell, get_or_create_sheet
from src.workbook.layout import (
    ADMINS_HEADERS,
    ADMINS_SHEET,
    EXAMPLE_MINISTRIES,
    FOLLOWUP_QUESTIONS_HEADERS,
    FOLLOWUP_QUESTIONS_SHEET,
    FOLLOWUP_RESPONSES_HEADERS,
    FOLLOWUP_RESPONSES_SHEET,
    MINISTRIES_HEADERS,
    MINISTRIES_SHEET,
    NEW_PARISHIONERS_HEADERS,
    NEW_PARISHIONERS_SHEET,
    SIGNUP_ACTION_COL,
    SIGNUPS_HEADERS,
    SIGNUPS_SHEET,
)

logger = logging.getLogger(__name__)


def setup_workbook(workbook: Workbook, *, seed_examples: bool = True) -> list[str]:
    """Create missing app tabs. Returns the names of tabs that were created."""

    created: list[str] = []
    for name, headers in (
        (SIGNUPS_SHEET, SIGNUPS_HEADERS),
        (NEW_PARISHIONERS_SHEET, NEW_PARISHIONERS_HEADERS),
        (ADMINS_SHEET, ADMINS_HEADERS),
        (FOLLOWUP_QUESTIONS_SHEET, FOLLOWUP_QUESTIONS_HEADERS),
        (FOLLOWUP_RESPONSES_SHEET, FOLLOWUP_RESPONSES_HEADERS),
    ):
        if workbook.worksheet(name) is None:
            get_or_create_sheet(workbook, name, headers)
            created.append(name)

    if workbook.worksheet(MINISTRIES_SHEET) is None:
        ministries = workbook.add_worksheet(MINISTRIES_SHEET, MINISTRIES_HEADERS)
        if seed_examples:
            for row in EXAMPLE_MINISTRIES:
                ministries.append_row(row)
        created.append(MINISTRIES_SHEET)

    logger.info("Workbook setup complete; created tabs: %s", ", ".join(created) or "none")
    return created


def add_action_column(workbook: Workbook) -> bool:
    """Insert the Action column into App Signups, marking existing rows as signups.

    Returns False when the sheet is missing or already has the column.
    """

    sheet = workbook.worksheet(SIGNUPS_SHEET)
    if sheet is None:
        logger.warning("%s sheet not found", SIGNUPS_SHEET)
        return False

    rows = sheet.get_all_values()
    headers = rows[0] if rows else []
    if cell(headers, SIGNUP_ACTION_COL) == "Action":
        logger.info("Action column already exists")
        return False

    sheet.insert_columns(SIGNUP_ACTION_COL, ["Action"])
    existing = len(rows) - 1
    if existing > 0:
        sheet.update_cells(2, SIGNUP_ACTION_COL + 1, [["Signup"] for _ in range(existing)])
    logger.info("Action column added; %d existing rows marked as Signup", max(existing, 0))
    return True


def add_organizer_columns(workbook: Workbook) -> bool:
    """Insert Organizer Name/Email/Phone after the Icon column of Ministries."""

    sheet = workbook.worksheet(MINISTRIES_SHEET)
    if sheet is None:
        logger.warning("%s sheet not found; run setup first", MINISTRIES_SHEET)
        return False

    rows = sheet.get_all_values()
    headers = rows[0] if rows else []
    if cell(headers, 4) == "Organizer Name":
        logger.info("Organizer columns already exist")
        return False

    sheet.insert_columns(4, ["Organizer Name", "Organizer Email", "Organizer Phone"])
    logger.info("Organizer columns added")
    return True
