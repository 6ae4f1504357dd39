# This file defines shared schema pieces reused by multiple API endpoints.
# It exists so envelope metadata, action results, and error payloads stay consistent.
# Payload models use camelCase on the wire, matching what the signup front end already sends.
# Input models coerce blanks and stray types so spreadsheet writes never see None.

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def coerce_text(value: Any) -> str:
    """Turn a loosely typed JSON value into cell text."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (list, tuple)):
        return ", ".join(coerce_text(item) for item in value if item not in (None, ""))
    return value if isinstance(value, str) else str(value)


def coerce_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(value)


class EnvelopeFields(BaseModel):
    api_version: str
    schema_version: str
    request_id: str
    generated_at: datetime
    warnings: list[str] | None = None


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime


class ActionResultV1(CamelModel):
    success: bool = True


class ActionResponseV1(EnvelopeFields):
    data: ActionResultV1


CellText = Annotated[str, BeforeValidator(coerce_text)]
Flag = Annotated[bool, BeforeValidator(coerce_flag)]
