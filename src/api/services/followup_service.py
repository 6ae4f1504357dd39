# This file implements multi-round follow-up questionnaires for ministries.
# It exists so leaders can ask new volunteers a few more questions after the fair.
# Questions are stored one row per (ministry, round); saving replaces every row for the ministry.
# Reading questions and submitting answers are public; reading answers is role-gated.

from __future__ import annotations

import logging
import re
from typing import Any

from src.api.error_handlers import bad_request
from src.api.schemas.followup_schemas import FollowupResponseInput
from src.api.security import AccessPolicy
from src.common.timefmt import Clock, sheet_timestamp
from src.workbook.base import Workbook, cell, get_or_create_sheet
from src.workbook.layout import (
    FOLLOWUP_QUESTIONS_HEADERS,
    FOLLOWUP_QUESTIONS_SHEET,
    FOLLOWUP_RESPONSES_HEADERS,
    FOLLOWUP_RESPONSES_SHEET,
    MINISTRIES_SHEET,
    MINISTRY_ID_COL,
    MINISTRY_NAME_COL,
    QUESTION_SLOTS,
    RESPONSE_MINISTRY_COL,
)

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
QUESTION_START_COL = 3
RESPONSE_FIELDS = (
    "date",
    "time",
    "firstName",
    "lastName",
    "email",
    "phone",
    "ministry",
    "round",
    "q1",
    "q2",
    "q3",
)


def parse_round(value: str) -> int:
    """Read a round number the lenient way sheet users type it; blank, zero, or junk means round 1."""

    match = _LEADING_INT.match(value)
    number = int(match.group(1)) if match else 0
    return number or 1


def pad_slots(values: list[str]) -> list[str]:
    return [cell(values, index) for index in range(QUESTION_SLOTS)]


class FollowupService:
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

    def get_questions(self, ministry_id: str | None) -> dict[str, list[list[str]]]:
        if not ministry_id:
            return {"rounds": []}
        sheet = self.workbook.worksheet(FOLLOWUP_QUESTIONS_SHEET)
        if sheet is None:
            return {"rounds": []}

        by_round: dict[int, list[str]] = {}
        for row in sheet.get_all_values()[1:]:
            if cell(row, 0) != ministry_id:
                continue
            questions = [
                cell(row, index)
                for index in range(QUESTION_START_COL, QUESTION_START_COL + QUESTION_SLOTS)
                if cell(row, index)
            ]
            # Later rows for the same round win.
            by_round[parse_round(cell(row, 2))] = questions

        rounds: list[list[str]] = []
        for number in sorted(number for number in by_round if number > 0):
            while len(rounds) < number:
                rounds.append([])
            rounds[number - 1] = by_round[number]
        return {"rounds": rounds}

    def save_questions(self, requester: str | None, ministry_id: str, rounds: list[list[str]]) -> None:
        self.policy.require_ministry_access(requester, ministry_id)
        if not ministry_id:
            raise bad_request("Ministry ID required")

        sheet = get_or_create_sheet(self.workbook, FOLLOWUP_QUESTIONS_SHEET, FOLLOWUP_QUESTIONS_HEADERS)
        ministry_name = self._ministry_name(ministry_id)

        existing = sheet.get_all_values()
        for row_number in range(len(existing), 1, -1):
            if cell(existing[row_number - 1], 0) == ministry_id:
                sheet.delete_row(row_number)

        for number, questions in enumerate(rounds, start=1):
            sheet.append_row([ministry_id, ministry_name, number, *pad_slots(questions)])
        logger.info("Saved %d follow-up rounds for ministry id=%s", len(rounds), ministry_id)

    def _ministry_name(self, ministry_id: str) -> str:
        sheet = self.workbook.worksheet(MINISTRIES_SHEET)
        if sheet is None:
            return ministry_id
        for row in sheet.get_all_values()[1:]:
            if cell(row, MINISTRY_ID_COL) == ministry_id:
                return cell(row, MINISTRY_NAME_COL) or ministry_id
        return ministry_id

    def submit_response(self, payload: FollowupResponseInput) -> None:
        date, time = sheet_timestamp(self.timezone, self.clock)
        sheet = get_or_create_sheet(self.workbook, FOLLOWUP_RESPONSES_SHEET, FOLLOWUP_RESPONSES_HEADERS)
        round_value = payload.round if payload.round not in ("", "0") else "1"
        sheet.append_row(
            [
                date,
                time,
                payload.first_name,
                payload.last_name,
                payload.email,
                payload.phone,
                payload.ministry_name or payload.ministry_id,
                round_value,
                *pad_slots(payload.answers),
            ]
        )
        logger.info("Recorded follow-up response for ministry=%s round=%s", payload.ministry_id, round_value)

    def list_responses(self, requester: str | None, ministry_id: str | None = None) -> list[dict[str, Any]]:
        self.policy.require_response_access(requester, ministry_id)
        sheet = self.workbook.worksheet(FOLLOWUP_RESPONSES_SHEET)
        if sheet is None:
            return []
        return [
            {name: cell(row, index) for index, name in enumerate(RESPONSE_FIELDS)}
            for row in sheet.get_all_values()[1:]
            if not ministry_id or cell(row, RESPONSE_MINISTRY_COL) == ministry_id
        ]
