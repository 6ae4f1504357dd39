"""
Infer a ministry list from an arbitrary spreadsheet layout.
Columns are scored by the shape of their sample values plus header hints, then assigned to roles.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from src.workbook.base import cell
from src.workbook.layout import DEFAULT_ICON

FORMAT_DETECTED = "detected"
SAMPLE_ROW_LIMIT = 19
MAX_SLUG_LENGTH = 40

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\s()\-+.]{7,}$")
NUMBER_PATTERN = re.compile(r"^\d+$")
URL_PATTERN = re.compile(r"^https?://")
DATE_PATTERN = re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}")
PERSON_NAME_PATTERN = re.compile(r"[A-Z][a-z]+ [A-Z][a-z]+")
DESCRIPTION_MIN_LENGTH = 80


@dataclass
class ColumnScores:
    email: int = 0
    phone: int = 0
    name: int = 0
    ministry: int = 0
    number: int = 0
    description: int = 0
    url: int = 0
    date: int = 0
    empty: int = 0


@dataclass
class ColumnMapping:
    email: int = -1
    name: int = -1
    ministry: int = -1
    phone: int = -1
    description: int = -1

    def as_dict(self) -> dict[str, int]:
        return {
            "email": self.email,
            "name": self.name,
            "ministry": self.ministry,
            "phone": self.phone,
            "description": self.description,
        }


@dataclass
class DetectionResult:
    mapping: ColumnMapping
    scores: list[ColumnScores] = field(default_factory=list)


def classify_value(value: str) -> str:
    """Return the ColumnScores bucket a single trimmed cell value falls into."""

    if not value:
        return "empty"
    if EMAIL_PATTERN.match(value):
        return "email"
    if PHONE_PATTERN.match(value):
        return "phone"
    if NUMBER_PATTERN.match(value):
        return "number"
    if URL_PATTERN.match(value):
        return "url"
    if DATE_PATTERN.match(value):
        return "date"
    if len(value) > DESCRIPTION_MIN_LENGTH:
        return "description"
    return "name"


def apply_header_hints(scores: ColumnScores, header: str) -> None:
    if "email" in header:
        scores.email += 10
    if "phone" in header or "cell" in header or "mobile" in header:
        scores.phone += 10
    if "name" in header and "ministry" not in header:
        scores.name += 5
    if "ministry" in header or "group" in header or "team" in header:
        scores.ministry += 10
    if "description" in header or "what" in header or "about" in header:
        scores.description += 10
    if "contact" in header:
        scores.name += 3


def score_columns(headers: Sequence[Any], sample_rows: Sequence[Sequence[str]]) -> list[ColumnScores]:
    scores = [ColumnScores() for _ in headers]
    for row in sample_rows:
        for index, column_scores in enumerate(scores):
            bucket = classify_value(cell(row, index).strip())
            setattr(column_scores, bucket, getattr(column_scores, bucket) + 1)

    for index, column_scores in enumerate(scores):
        apply_header_hints(column_scores, str(headers[index] or "").strip().lower())
    return scores


def _best_column(scores: Sequence[ColumnScores], role: str, taken: set[int]) -> int:
    best_index = -1
    best_score = 0
    for index, column_scores in enumerate(scores):
        if index in taken:
            continue
        value = getattr(column_scores, role)
        if value > best_score:
            best_score = value
            best_index = index
    return best_index


def _person_like_count(sample_rows: Sequence[Sequence[str]], index: int) -> int:
    return sum(1 for row in sample_rows if PERSON_NAME_PATTERN.fullmatch(cell(row, index).strip()))


def assign_columns(scores: Sequence[ColumnScores], sample_rows: Sequence[Sequence[str]]) -> ColumnMapping:
    """Assign email, phone, description, then split the remaining text columns into ministry and contact name."""

    mapping = ColumnMapping()
    taken: set[int] = set()
    for role in ("email", "phone", "description"):
        index = _best_column(scores, role, taken)
        setattr(mapping, role, index)
        if index >= 0:
            taken.add(index)

    text_columns = [
        index
        for index, column_scores in enumerate(scores)
        if index not in taken and (column_scores.name > 0 or column_scores.ministry > 0)
    ]

    if len(text_columns) >= 2:
        first, second = text_columns[0], text_columns[1]
        if scores[first].ministry > scores[second].ministry:
            mapping.ministry, mapping.name = first, second
        elif scores[second].ministry > scores[first].ministry:
            mapping.ministry, mapping.name = second, first
        elif _person_like_count(sample_rows, first) > _person_like_count(sample_rows, second):
            mapping.name, mapping.ministry = first, second
        else:
            mapping.name, mapping.ministry = second, first
    elif len(text_columns) == 1:
        mapping.ministry = text_columns[0]
    return mapping


def detect_columns(rows: Sequence[Sequence[str]]) -> DetectionResult:
    headers = list(rows[0]) if rows else []
    sample_rows = rows[1 : 1 + SAMPLE_ROW_LIMIT]
    scores = score_columns(headers, sample_rows)
    return DetectionResult(mapping=assign_columns(scores, sample_rows), scores=scores)


def slugify_ministry_id(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug[:MAX_SLUG_LENGTH]


def _column_value(row: Sequence[str], index: int) -> str:
    return cell(row, index).strip() if index >= 0 else ""


def read_detected_format(rows: Sequence[Sequence[str]]) -> dict[str, Any]:
    """Build ministries from a non-standard tab, deduplicating by normalized ministry name."""

    mapping = detect_columns(rows).mapping
    seen: set[str] = set()
    ministries: list[dict[str, Any]] = []

    for row in rows[1:]:
        name = _column_value(row, mapping.ministry)
        if not name or NUMBER_PATTERN.match(name) or EMAIL_PATTERN.match(name):
            continue
        key = re.sub(r"\s+", " ", name.lower())
        if key in seen:
            continue
        seen.add(key)
        ministries.append(
            {
                "id": slugify_ministry_id(name),
                "name": name,
                "description": _column_value(row, mapping.description),
                "icon": DEFAULT_ICON,
                "organizerName": _column_value(row, mapping.name),
                "organizerEmail": _column_value(row, mapping.email),
                "organizerPhone": _column_value(row, mapping.phone),
                "questions": [],
            }
        )

    return {
        "ministries": ministries,
        "format": FORMAT_DETECTED,
        "columnMapping": mapping.as_dict(),
    }
