# This file implements the admin roster kept on the Admins tab.
# It exists so admins can grant and revoke admin access without editing the spreadsheet by hand.
# Emails are stored lowercased and compared case-insensitively.

from __future__ import annotations

import logging
from typing import Any

from src.api.error_handlers import APIError, bad_request, not_found
from src.api.security import AccessPolicy
from src.common.timefmt import Clock, sheet_timestamp
from src.workbook.base import Workbook, cell, get_or_create_sheet
from src.workbook.layout import ADMINS_HEADERS, ADMINS_SHEET, normalize_email

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        *,
        workbook: Workbook,
        timezone: str,
        clock: Clock | None = None,
        policy: AccessPolicy | None = None,
    ) -> None:
        self.workbook = workbook
        self.timezone = timezone
        self.clock = clock
        self.policy = policy or AccessPolicy(workbook)

    def list_admins(self, requester: str | None) -> list[dict[str, Any]]:
        self.policy.require_admin(requester)
        sheet = self.workbook.worksheet(ADMINS_SHEET)
        if sheet is None:
            return []
        return [
            {"email": cell(row, 0), "name": cell(row, 1), "addedDate": cell(row, 2)}
            for row in sheet.get_all_values()[1:]
            if cell(row, 0)
        ]

    def add_admin(self, requester: str | None, email: str | None, name: str = "") -> None:
        self.policy.require_admin(requester)
        normalized = normalize_email(email)
        if not normalized:
            raise bad_request("Email is required")

        sheet = get_or_create_sheet(self.workbook, ADMINS_SHEET, ADMINS_HEADERS)
        if any(normalize_email(cell(row, 0)) == normalized for row in sheet.get_all_values()[1:]):
            raise APIError(status_code=409, error_code="ADMIN_EXISTS", message="Admin already exists")

        date, _ = sheet_timestamp(self.timezone, self.clock)
        sheet.append_row([normalized, name, date])
        logger.info("Added admin %s", normalized)

    def remove_admin(self, requester: str | None, email: str | None) -> None:
        self.policy.require_admin(requester)
        sheet = self.workbook.worksheet(ADMINS_SHEET)
        if sheet is None:
            raise not_found("SHEET_NOT_FOUND", "Admins sheet not found")

        normalized = normalize_email(email)
        for row_number, row in enumerate(sheet.get_all_values()[1:], start=2):
            if cell(row, 0) and normalize_email(cell(row, 0)) == normalized:
                sheet.delete_row(row_number)
                logger.info("Removed admin %s", normalized)
                return
        raise not_found("ADMIN_NOT_FOUND", "Admin not found")
