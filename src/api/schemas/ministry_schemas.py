# This file defines ministry listing, sheet scan, and ministry edit schemas.
# It exists so the ministry list contract stays identical whether a tab is standard or detected.
# Detected lists carry the inferred column mapping so admins can confirm what was read.
# Edit payloads mirror the Ministries tab columns one to one.

from __future__ import annotations

from pydantic import Field

from src.api.schemas.common import CamelModel, CellText, EnvelopeFields


class QuestionV1(CamelModel):
    id: str
    type: str
    label: str
    options: list[str] = Field(default_factory=list)


class MinistryV1(CamelModel):
    id: str
    name: str
    description: str = ""
    icon: str
    organizer_name: str = ""
    organizer_email: str = ""
    organizer_phone: str = ""
    questions: list[QuestionV1] = Field(default_factory=list)
    tags: list[str] | None = None


class ColumnMappingV1(CamelModel):
    email: int
    name: int
    ministry: int
    phone: int
    description: int


class MinistryListV1(CamelModel):
    ministries: list[MinistryV1]
    format: str
    column_mapping: ColumnMappingV1 | None = None


class MinistryListResponseV1(EnvelopeFields):
    data: MinistryListV1


class SheetCandidateV1(CamelModel):
    name: str
    row_count: int
    col_count: int
    score: int
    matched_fields: list[str]
    headers: list[str]
    preview: list[list[str]]


class SheetScanV1(CamelModel):
    sheets: list[SheetCandidateV1]
    recommended: str | None = None


class SheetScanResponseV1(EnvelopeFields):
    data: SheetScanV1


class MinistryInput(CamelModel):
    id: CellText = ""
    name: CellText = ""
    description: CellText = ""
    icon: CellText = ""
    organizer_name: CellText = ""
    organizer_email: CellText = ""
    organizer_phone: CellText = ""
    question1: CellText = ""
    question2: CellText = ""
    question3: CellText = ""
    tags: CellText = ""
    admin_email: CellText = ""
