"""
Unit tests for follow-up questions and responses.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import pytest

from src.api.error_handlers import APIError
from src.api.schemas.followup_schemas import FollowupResponseInput
from src.api.security import PermissionDenied
from src.api.services.followup_service import FollowupService, parse_round
from src.workbook.layout import FOLLOWUP_QUESTIONS_SHEET, FOLLOWUP_RESPONSES_SHEET
from src.workbook.memory import MemoryWorkbook
from tests.api.support import ADMIN_EMAIL, LEADER_EMAIL, fixed_clock, seeded_workbook


def _service(workbook: MemoryWorkbook | None = None) -> FollowupService:
    return FollowupService(
        workbook=workbook if workbook is not None else seeded_workbook(),
        timezone="America/Chicago",
        clock=fixed_clock,
    )


def test_parse_round_is_lenient() -> None:
    assert parse_round("2") == 2
    assert parse_round(" 3rd") == 3
    assert parse_round("") == 1
    assert parse_round("0") == 1
    assert parse_round("next") == 1


def test_save_then_get_round_trips_questions() -> None:
    service = _service()

    service.save_questions(LEADER_EMAIL, "music", [["How did it go?", "Want a mentor?"], ["Which Mass?"]])

    rows = service.workbook.worksheet(FOLLOWUP_QUESTIONS_SHEET).get_all_values()
    assert rows[1] == ["music", "Music Ministry", "1", "How did it go?", "Want a mentor?", ""]
    assert service.get_questions("music") == {
        "rounds": [["How did it go?", "Want a mentor?"], ["Which Mass?"]]
    }


def test_save_replaces_existing_rows_for_ministry_only() -> None:
    service = _service()
    service.save_questions(ADMIN_EMAIL, "youth", [["Youth Q"]])
    service.save_questions(ADMIN_EMAIL, "music", [["Old 1"], ["Old 2"], ["Old 3"]])

    service.save_questions(ADMIN_EMAIL, "music", [["New 1"]])

    assert service.get_questions("music") == {"rounds": [["New 1"]]}
    assert service.get_questions("youth") == {"rounds": [["Youth Q"]]}


def test_get_questions_fills_gaps_and_ignores_negative_rounds() -> None:
    workbook = seeded_workbook()
    sheet = workbook.worksheet(FOLLOWUP_QUESTIONS_SHEET)
    sheet.append_row(["music", "Music Ministry", "3", "Third"])
    sheet.append_row(["music", "Music Ministry", "-1", "Ignored"])
    sheet.append_row(["music", "Music Ministry", "", "First"])
    sheet.append_row(["music", "Music Ministry", "1", "First again"])

    assert _service(workbook).get_questions("music") == {"rounds": [["First again"], [], ["Third"]]}
    assert _service(workbook).get_questions("") == {"rounds": []}


def test_save_questions_enforces_ministry_access() -> None:
    service = _service()

    with pytest.raises(PermissionDenied):
        service.save_questions(LEADER_EMAIL, "youth", [["Q"]])
    with pytest.raises(APIError) as missing:
        service.save_questions(ADMIN_EMAIL, "", [["Q"]])
    assert missing.value.message == "Ministry ID required"


def test_submit_response_defaults_round_and_pads_answers() -> None:
    service = _service()
    payload = FollowupResponseInput.model_validate(
        {
            "firstName": "Ann",
            "lastName": "Lee",
            "email": "ann@example.com",
            "ministryId": "music",
            "round": 0,
            "answers": ["Great", ["Sunday", "Saturday"]],
        }
    )

    service.submit_response(payload)

    rows = service.workbook.worksheet(FOLLOWUP_RESPONSES_SHEET).get_all_values()
    assert rows[-1] == [
        "3/14/26",
        "10:05 AM",
        "Ann",
        "Lee",
        "ann@example.com",
        "",
        "music",
        "1",
        "Great",
        "Sunday, Saturday",
        "",
    ]


def test_list_responses_filters_by_ministry_and_role() -> None:
    service = _service()
    for ministry in ("music", "youth"):
        service.submit_response(FollowupResponseInput.model_validate({"ministryId": ministry, "round": "2"}))

    assert [row["ministry"] for row in service.list_responses(LEADER_EMAIL, "music")] == ["music"]
    assert len(service.list_responses(ADMIN_EMAIL)) == 2
    with pytest.raises(PermissionDenied):
        service.list_responses(LEADER_EMAIL, "youth")
    with pytest.raises(PermissionDenied):
        service.list_responses("stranger@example.com")
