"""
Unit tests for the in-memory workbook, workbook setup, and column migrations.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import pytest

from src.workbook.base import get_or_create_sheet
from src.workbook.bootstrap import add_action_column, add_organizer_columns, setup_workbook
from src.workbook.layout import (
    APP_MANAGED_SHEETS,
    EXAMPLE_MINISTRIES,
    MINISTRIES_HEADERS,
    MINISTRIES_SHEET,
    SIGNUPS_SHEET,
)
from src.workbook.memory import MemoryWorkbook, MemoryWorksheet


def test_memory_worksheet_pads_ragged_updates() -> None:
    sheet = MemoryWorksheet("Tab", [["a", "b"]])

    sheet.update_cells(3, 2, [["x", True], [None]])

    assert sheet.get_all_values() == [["a", "b"], [], ["", "x", "TRUE"], ["", ""]]


def test_memory_worksheet_delete_row_is_one_based() -> None:
    sheet = MemoryWorksheet("Tab", [["h"], ["1"], ["2"]])

    sheet.delete_row(2)

    assert sheet.get_all_values() == [["h"], ["2"]]
    with pytest.raises(IndexError):
        sheet.delete_row(5)


def test_get_or_create_sheet_leaves_existing_tab_untouched() -> None:
    workbook = MemoryWorkbook({"Admins": [["Email"], ["a@b.org"]]})

    sheet = get_or_create_sheet(workbook, "Admins", ["Other", "Header"])

    assert sheet.get_all_values() == [["Email"], ["a@b.org"]]


def test_setup_creates_every_tab_and_seeds_examples() -> None:
    workbook = MemoryWorkbook()

    created = setup_workbook(workbook)

    assert set(created) == {*APP_MANAGED_SHEETS, MINISTRIES_SHEET}
    rows = workbook.worksheet(MINISTRIES_SHEET).get_all_values()
    assert rows[0] == MINISTRIES_HEADERS
    assert len(rows) == 1 + len(EXAMPLE_MINISTRIES)


def test_setup_is_idempotent_and_can_skip_examples() -> None:
    workbook = MemoryWorkbook()
    setup_workbook(workbook, seed_examples=False)

    assert setup_workbook(workbook) == []
    assert workbook.worksheet(MINISTRIES_SHEET).get_all_values() == [MINISTRIES_HEADERS]


def test_add_action_column_marks_existing_rows_as_signups() -> None:
    old_headers = ["Date", "Time", "First", "Last", "Email", "Phone", "New Parishioner", "Ministry", "Q1"]
    workbook = MemoryWorkbook(
        {
            SIGNUPS_SHEET: [
                old_headers,
                ["1/1/26", "9:00 AM", "Ann", "Lee", "a@x.org", "", "No", "Music Ministry", "Alto"],
            ]
        }
    )

    assert add_action_column(workbook) is True
    rows = workbook.worksheet(SIGNUPS_SHEET).get_all_values()
    assert rows[0][8] == "Action"
    assert rows[1][7:10] == ["Music Ministry", "Signup", "Alto"]

    assert add_action_column(workbook) is False


def test_add_action_column_without_sheet_is_noop() -> None:
    assert add_action_column(MemoryWorkbook()) is False


def test_add_organizer_columns_inserts_after_icon() -> None:
    workbook = MemoryWorkbook(
        {
            MINISTRIES_SHEET: [
                ["ID", "Name", "Description", "Icon", "Question 1"],
                ["music", "Music", "Sing", "🎵", "text|Part?"],
            ]
        }
    )

    assert add_organizer_columns(workbook) is True
    rows = workbook.worksheet(MINISTRIES_SHEET).get_all_values()
    assert rows[0][3:8] == ["Icon", "Organizer Name", "Organizer Email", "Organizer Phone", "Question 1"]
    assert rows[1][3:8] == ["🎵", "", "", "", "text|Part?"]

    assert add_organizer_columns(workbook) is False
