# This file defines follow-up questionnaire schemas.
# It exists so leaders can publish multi-round questions and collect answers with one contract.
# Rounds are positional: rounds[0] is round 1, and each round holds up to three questions.
# Responses keep the ministry and round they answer so reports can be filtered later.

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from src.api.schemas.common import CamelModel, CellText, EnvelopeFields, coerce_text


def _coerce_text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        value = [value]
    return [coerce_text(item) for item in value]


class FollowupQuestionsV1(CamelModel):
    rounds: list[list[str]]


class FollowupQuestionsResponseV1(EnvelopeFields):
    data: FollowupQuestionsV1


class FollowupQuestionsInput(CamelModel):
    ministry_id: CellText = ""
    rounds: list[list[str]] = Field(default_factory=list)
    admin_email: CellText = ""

    @field_validator("rounds", mode="before")
    @classmethod
    def coerce_rounds(cls, value: Any) -> list[list[str]]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValueError("rounds must be a list of question lists")
        return [_coerce_text_list(round_questions) for round_questions in value]


class FollowupResponseInput(CamelModel):
    first_name: CellText = ""
    last_name: CellText = ""
    email: CellText = ""
    phone: CellText = ""
    ministry_id: CellText = ""
    ministry_name: CellText = ""
    round: CellText = ""
    answers: list[str] = Field(default_factory=list)

    @field_validator("answers", mode="before")
    @classmethod
    def coerce_answers(cls, value: Any) -> list[str]:
        return _coerce_text_list(value)


class FollowupResponseRowV1(CamelModel):
    date: str
    time: str
    first_name: str
    last_name: str
    email: str
    phone: str
    ministry: str
    round: str
    q1: str
    q2: str
    q3: str


class FollowupResponseListResponseV1(EnvelopeFields):
    data: list[FollowupResponseRowV1]
