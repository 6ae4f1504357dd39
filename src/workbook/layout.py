"""
Tab names and header rows for every table the app keeps in the workbook.
Column positions matter: readers index rows by position, so headers here are the schema.
"""

from __future__ import annotations

from typing import Final

MINISTRIES_SHEET: Final[str] = "Ministries"
SIGNUPS_SHEET: Final[str] = "App Signups"
NEW_PARISHIONERS_SHEET: Final[str] = "New Parishioners"
ADMINS_SHEET: Final[str] = "Admins"
FOLLOWUP_QUESTIONS_SHEET: Final[str] = "Follow-Up Questions"
FOLLOWUP_RESPONSES_SHEET: Final[str] = "Follow-Up Responses"

# Tabs the app writes itself; never offered as a ministry list.
APP_MANAGED_SHEETS: Final[tuple[str, ...]] = (
    SIGNUPS_SHEET,
    NEW_PARISHIONERS_SHEET,
    ADMINS_SHEET,
    FOLLOWUP_QUESTIONS_SHEET,
    FOLLOWUP_RESPONSES_SHEET,
)

DEFAULT_ICON: Final[str] = "📋"
QUESTION_SLOTS: Final[int] = 3

MINISTRIES_HEADERS: Final[list[str]] = [
    "ID",
    "Name",
    "Description",
    "Icon",
    "Organizer Name",
    "Organizer Email",
    "Organizer Phone",
    "Question 1",
    "Question 2",
    "Question 3",
    "Tags",
]
SIGNUPS_HEADERS: Final[list[str]] = [
    "Date",
    "Time",
    "First",
    "Last",
    "Email",
    "Phone",
    "New Parishioner",
    "Ministry",
    "Action",
    "Q1",
    "Q2",
    "Q3",
]
NEW_PARISHIONERS_HEADERS: Final[list[str]] = ["Date", "Time", "First", "Last", "Email", "Phone"]
ADMINS_HEADERS: Final[list[str]] = ["Email", "Name", "Date Added"]
FOLLOWUP_QUESTIONS_HEADERS: Final[list[str]] = ["Ministry ID", "Ministry Name", "Round", "Q1", "Q2", "Q3"]
FOLLOWUP_RESPONSES_HEADERS: Final[list[str]] = [
    "Date",
    "Time",
    "First",
    "Last",
    "Email",
    "Phone",
    "Ministry",
    "Round",
    "Q1",
    "Q2",
    "Q3",
]

# Ministries columns (0-based).
MINISTRY_ID_COL: Final[int] = 0
MINISTRY_NAME_COL: Final[int] = 1
MINISTRY_ORGANIZER_EMAIL_COL: Final[int] = 5
MINISTRY_FIRST_QUESTION_COL: Final[int] = 7
MINISTRY_TAGS_COL: Final[int] = 10

# App Signups columns (0-based).
SIGNUP_MINISTRY_COL: Final[int] = 7
SIGNUP_ACTION_COL: Final[int] = 8

# Follow-Up Responses columns (0-based).
RESPONSE_MINISTRY_COL: Final[int] = 6

EXAMPLE_MINISTRIES: Final[list[list[str]]] = [
    [
        "music",
        "Music Ministry",
        "Supports parish liturgies through choirs, cantors, and instrumentalists.",
        "🎵",
        "Jane Smith",
        "jane@parish.org",
        "5125551234",
        "select|Voice part (if known)|Not sure,Soprano,Alto,Tenor,Bass",
        "text|Do you play an instrument? Which one(s)?",
        "",
        "liturgy",
    ],
    [
        "hospitality",
        "Hospitality Ministers",
        "Welcomes parishioners and assists during Masses and parish events.",
        "🚪",
        "John Doe",
        "john@parish.org",
        "5125555678",
        "checkbox|Which Mass times work for you?|Saturday 5pm,Sunday 9am,Sunday 11am",
        "",
        "",
        "liturgy, socializing, lay-leadership",
    ],
    [
        "youth",
        "Youth Ministry",
        "Faith formation and fellowship for middle and high school students.",
        "🌟",
        "",
        "",
        "",
        "",
        "",
        "",
        "service, socializing, lay-leadership",
    ],
    [
        "svdp",
        "St. Vincent de Paul Society",
        "Assists individuals and families in need through direct support and resources.",
        "💚",
        "",
        "",
        "",
        "",
        "",
        "",
        "service",
    ],
    [
        "bible-study",
        "Bible Study",
        "Offers structured Scripture study with group discussion.",
        "📖",
        "",
        "",
        "",
        "",
        "",
        "",
        "bible-study",
    ],
]


def normalize_email(value: str | None) -> str:
    return (value or "").strip().lower()
