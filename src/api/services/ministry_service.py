# This file implements ministry listing, tab scanning, and ministry edits.
# It exists so routers can serve the ministry list without knowing how a tab is laid out.
# Reads pick the standard or detected reader per tab; writes always use the Ministries layout.
# Edits are admin-only and are checked against the Admins tab on every call.

from __future__ import annotations

import logging
from typing import Any

from src.api.error_handlers import not_found
from src.api.schemas.ministry_schemas import MinistryInput
from src.api.security import AccessPolicy
from src.ministries.parsing import read_ministries
from src.ministries.sheet_scanner import scan_workbook
from src.workbook.base import Workbook, Worksheet, cell
from src.workbook.layout import DEFAULT_ICON, MINISTRIES_SHEET, MINISTRY_ID_COL

logger = logging.getLogger(__name__)


def ministry_row(payload: MinistryInput, ministry_id: str | None = None) -> list[str]:
    return [
        ministry_id if ministry_id is not None else payload.id,
        payload.name,
        payload.description,
        payload.icon or DEFAULT_ICON,
        payload.organizer_name,
        payload.organizer_email,
        payload.organizer_phone,
        payload.question1,
        payload.question2,
        payload.question3,
        payload.tags,
    ]


class MinistryService:
    """Ministry reads and admin edits against one workbook."""

    def __init__(self, *, workbook: Workbook, policy: AccessPolicy | None = None) -> None:
        self.workbook = workbook
        self.policy = policy or AccessPolicy(workbook)

    def list_ministries(self, sheet_name: str | None = None) -> dict[str, Any]:
        sheet = self.workbook.worksheet(sheet_name or MINISTRIES_SHEET)
        if sheet is None:
            raise not_found("SHEET_NOT_FOUND", "Ministries sheet not found")
        return read_ministries(sheet.get_all_values())

    def scan_sheets(self) -> dict[str, Any]:
        return scan_workbook(self.workbook)

    def add_ministry(self, requester: str | None, payload: MinistryInput) -> None:
        self.policy.require_admin(requester)
        sheet = self._ministries_sheet()
        sheet.append_row(ministry_row(payload))
        logger.info("Added ministry id=%s name=%s", payload.id, payload.name)

    def update_ministry(self, requester: str | None, ministry_id: str, payload: MinistryInput) -> None:
        self.policy.require_admin(requester)
        sheet = self._ministries_sheet()
        row_number = self._find_row(sheet, ministry_id)
        sheet.update_row(row_number, ministry_row(payload, ministry_id))
        logger.info("Updated ministry id=%s", ministry_id)

    def delete_ministry(self, requester: str | None, ministry_id: str) -> None:
        self.policy.require_admin(requester)
        sheet = self._ministries_sheet()
        sheet.delete_row(self._find_row(sheet, ministry_id))
        logger.info("Deleted ministry id=%s", ministry_id)

    def _ministries_sheet(self) -> Worksheet:
        sheet = self.workbook.worksheet(MINISTRIES_SHEET)
        if sheet is None:
            raise not_found("SHEET_NOT_FOUND", "Ministries sheet not found")
        return sheet

    @staticmethod
    def _find_row(sheet: Worksheet, ministry_id: str) -> int:
        """Return the 1-based row number of the first row with `ministry_id`."""

        for index, row in enumerate(sheet.get_all_values()[1:], start=2):
            if ministry_id and cell(row, MINISTRY_ID_COL) == ministry_id:
                return index
        raise not_found("MINISTRY_NOT_FOUND", "Ministry not found")
