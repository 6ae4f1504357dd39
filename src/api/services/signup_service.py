# This file implements signup recording and the signup / new-parishioner reports.
# It exists so the public form, manual entries, and removals all land in App Signups the same way.
# People who ask to join the parish are also added to New Parishioners once per email address.
# Reports are role-gated: admins see everything, leaders only rows for ministries they organize.

from __future__ import annotations

import logging
from typing import Any

from src.api.schemas.signup_schemas import SignupInput
from src.api.security import AccessPolicy
from src.common.timefmt import Clock, sheet_timestamp
from src.workbook.base import Workbook, cell, get_or_create_sheet
from src.workbook.layout import (
    NEW_PARISHIONERS_HEADERS,
    NEW_PARISHIONERS_SHEET,
    SIGNUP_MINISTRY_COL,
    SIGNUPS_HEADERS,
    SIGNUPS_SHEET,
)

logger = logging.getLogger(__name__)

PARISH_JOIN_ACTIONS = frozenset({"Signup", "Manual Entry"})
SIGNUP_FIELDS = (
    "date",
    "time",
    "firstName",
    "lastName",
    "email",
    "phone",
    "newParishioner",
    "ministry",
    "action",
    "q1",
    "q2",
    "q3",
)
NEW_PARISHIONER_FIELDS = ("date", "time", "firstName", "lastName", "email", "phone")


def row_to_record(row: list[str], fields: tuple[str, ...]) -> dict[str, str]:
    return {name: cell(row, index) for index, name in enumerate(fields)}


class SignupService:
    """Signup writes and role-gated signup reports."""

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

    def record_signup(self, payload: SignupInput) -> None:
        date, time = sheet_timestamp(self.timezone, self.clock)
        signups = get_or_create_sheet(self.workbook, SIGNUPS_SHEET, SIGNUPS_HEADERS)
        signups.append_row(
            [
                date,
                time,
                payload.first_name,
                payload.last_name,
                payload.email,
                payload.phone,
                "Yes" if payload.wants_to_join_parish else "No",
                payload.ministry,
                payload.action,
                payload.q1,
                payload.q2,
                payload.q3,
            ]
        )
        logger.info("Recorded %s for ministry=%s", payload.action, payload.ministry)

        if payload.action in PARISH_JOIN_ACTIONS and payload.wants_to_join_parish:
            self._add_new_parishioner(payload, date, time)

    def _add_new_parishioner(self, payload: SignupInput, date: str, time: str) -> None:
        sheet = get_or_create_sheet(self.workbook, NEW_PARISHIONERS_SHEET, NEW_PARISHIONERS_HEADERS)
        rows = sheet.get_all_values()
        headers = rows[0] if rows else []
        if "Email" in headers:
            email_col = headers.index("Email")
            if any(cell(row, email_col) == payload.email for row in rows):
                return
        sheet.append_row(
            [date, time, payload.first_name, payload.last_name, payload.email, payload.phone]
        )
        logger.info("Added new parishioner from signup")

    def list_signups(self, requester: str | None) -> list[dict[str, Any]]:
        self.policy.require_admin(requester)
        return [row_to_record(row, SIGNUP_FIELDS) for row in self._rows(SIGNUPS_SHEET)]

    def list_leader_signups(self, requester: str | None) -> list[dict[str, Any]]:
        identity = self.policy.require_admin_or_leader(requester)
        ministry_names = identity.ministry_names()
        return [
            row_to_record(row, SIGNUP_FIELDS)
            for row in self._rows(SIGNUPS_SHEET)
            if cell(row, SIGNUP_MINISTRY_COL) in ministry_names
        ]

    def list_new_parishioners(self, requester: str | None) -> list[dict[str, Any]]:
        self.policy.require_admin(requester)
        return [row_to_record(row, NEW_PARISHIONER_FIELDS) for row in self._rows(NEW_PARISHIONERS_SHEET)]

    def _rows(self, sheet_name: str) -> list[list[str]]:
        sheet = self.workbook.worksheet(sheet_name)
        if sheet is None:
            return []
        return sheet.get_all_values()[1:]
