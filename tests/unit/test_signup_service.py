"""
Unit tests for signup recording and role-gated signup reports.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import pytest

from src.api.schemas.signup_schemas import SignupInput
from src.api.security import PermissionDenied
from src.api.services.signup_service import SignupService
from src.workbook.layout import NEW_PARISHIONERS_SHEET, SIGNUPS_SHEET
from src.workbook.memory import MemoryWorkbook
from tests.api.support import ADMIN_EMAIL, LEADER_EMAIL, fixed_clock, seeded_workbook


def _service(workbook: MemoryWorkbook | None = None) -> SignupService:
    return SignupService(
        workbook=workbook if workbook is not None else seeded_workbook(),
        timezone="America/Chicago",
        clock=fixed_clock,
    )


def _signup(**overrides: object) -> SignupInput:
    values: dict[str, object] = {
        "firstName": "Ann",
        "lastName": "Lee",
        "email": "ann@example.com",
        "phone": "5125550000",
        "ministry": "Music Ministry",
        "q1": ["Alto", "Tenor"],
    }
    values.update(overrides)
    return SignupInput.model_validate(values)


def test_record_signup_appends_timestamped_row() -> None:
    service = _service()

    service.record_signup(_signup())

    rows = service.workbook.worksheet(SIGNUPS_SHEET).get_all_values()
    assert rows[-1] == [
        "3/14/26",
        "10:05 AM",
        "Ann",
        "Lee",
        "ann@example.com",
        "5125550000",
        "No",
        "Music Ministry",
        "Signup",
        "Alto, Tenor",
        "",
        "",
    ]
    assert service.workbook.worksheet(NEW_PARISHIONERS_SHEET).get_all_values()[1:] == []


def test_join_parish_adds_new_parishioner_once_per_email() -> None:
    service = _service()

    service.record_signup(_signup(wantsToJoinParish=True))
    service.record_signup(_signup(wantsToJoinParish="true", ministry="Youth Ministry"))

    parishioners = service.workbook.worksheet(NEW_PARISHIONERS_SHEET).get_all_values()[1:]
    assert parishioners == [["3/14/26", "10:05 AM", "Ann", "Lee", "ann@example.com", "5125550000"]]
    assert len(service.workbook.worksheet(SIGNUPS_SHEET).get_all_values()) == 3


def test_removal_rows_never_add_new_parishioners() -> None:
    service = _service()

    service.record_signup(_signup(action="Removal", wantsToJoinParish=True))

    signups = service.workbook.worksheet(SIGNUPS_SHEET).get_all_values()
    assert signups[-1][6] == "Yes"
    assert signups[-1][8] == "Removal"
    assert service.workbook.worksheet(NEW_PARISHIONERS_SHEET).get_all_values()[1:] == []


def test_record_signup_creates_missing_tabs() -> None:
    service = _service(MemoryWorkbook())

    service.record_signup(_signup(action="Manual Entry", wantsToJoinParish=True))

    assert service.workbook.worksheet(SIGNUPS_SHEET).row_count == 2
    assert service.workbook.worksheet(NEW_PARISHIONERS_SHEET).row_count == 2


def test_list_signups_is_admin_only() -> None:
    service = _service()
    service.record_signup(_signup())

    signups = service.list_signups(ADMIN_EMAIL)

    assert signups[0]["firstName"] == "Ann"
    assert signups[0]["action"] == "Signup"
    with pytest.raises(PermissionDenied):
        service.list_signups(LEADER_EMAIL)
    with pytest.raises(PermissionDenied):
        service.list_new_parishioners(None)


def test_leader_signups_are_limited_to_led_ministries() -> None:
    service = _service()
    service.record_signup(_signup())
    service.record_signup(_signup(ministry="Youth Ministry", email="kid@example.com"))

    rows = service.list_leader_signups(LEADER_EMAIL)

    assert [row["ministry"] for row in rows] == ["Music Ministry"]
    with pytest.raises(PermissionDenied):
        service.list_leader_signups("")
    with pytest.raises(PermissionDenied):
        service.list_leader_signups("stranger@example.com")
