# This file defines signup, removal, and new-parishioner schemas.
# It exists so the public signup form and the admin reports share one row contract.
# Answers to checkbox questions may arrive as lists and are stored as comma-joined text.
# The action field distinguishes Signup, Removal, and Manual Entry rows.

from __future__ import annotations

from pydantic import field_validator

from src.api.schemas.common import CamelModel, CellText, EnvelopeFields, Flag

DEFAULT_SIGNUP_ACTION = "Signup"


class SignupInput(CamelModel):
    first_name: CellText = ""
    last_name: CellText = ""
    email: CellText = ""
    phone: CellText = ""
    wants_to_join_parish: Flag = False
    ministry: CellText = ""
    action: CellText = DEFAULT_SIGNUP_ACTION
    q1: CellText = ""
    q2: CellText = ""
    q3: CellText = ""

    @field_validator("action")
    @classmethod
    def default_action(cls, value: str) -> str:
        return value or DEFAULT_SIGNUP_ACTION


class SignupRowV1(CamelModel):
    date: str
    time: str
    first_name: str
    last_name: str
    email: str
    phone: str
    new_parishioner: str
    ministry: str
    action: str
    q1: str
    q2: str
    q3: str


class SignupListResponseV1(EnvelopeFields):
    data: list[SignupRowV1]


class NewParishionerRowV1(CamelModel):
    date: str
    time: str
    first_name: str
    last_name: str
    email: str
    phone: str


class NewParishionerListResponseV1(EnvelopeFields):
    data: list[NewParishionerRowV1]
