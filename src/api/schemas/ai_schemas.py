# This file defines request and response schemas for the AI proxy endpoints.
# It exists so the browser can ask for AI help without ever seeing the stored API key.
# Results are passed through as parsed JSON when the model returns JSON, or as text otherwise.
# Enrichment requests switch on sourceType: booklet files or supplementary spreadsheet text.

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from src.api.schemas.common import CamelModel, CellText, EnvelopeFields

DEFAULT_IMAGE_MEDIA_TYPE = "image/jpeg"
DEFAULT_BOOKLET_MEDIA_TYPE = "application/pdf"


class ApiKeyInput(CamelModel):
    api_key: CellText = ""


class ApiKeyStatusV1(CamelModel):
    has_key: bool


class ApiKeyStatusResponseV1(EnvelopeFields):
    data: ApiKeyStatusV1


class DomainLookupInput(CamelModel):
    domain: CellText = ""


class ColumnAnalysisInput(CamelModel):
    sample_data: CellText = ""
    prompt: CellText = ""
    headers: list[Any] = Field(default_factory=list)


class SignupSheetInput(CamelModel):
    image_data: CellText = ""
    media_type: CellText = ""
    default_ministry: CellText = ""
    ministry_names: list[str] = Field(default_factory=list)

    @field_validator("ministry_names", mode="before")
    @classmethod
    def coerce_names(cls, value: Any) -> list[str]:
        if not value:
            return []
        return [str(item) for item in value if item]


class EnrichInput(CamelModel):
    source_type: CellText = ""
    file_data: CellText = ""
    media_type: CellText = ""
    sample_data: CellText = ""
    existing_ministries: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("existing_ministries", mode="before")
    @classmethod
    def coerce_ministries(cls, value: Any) -> list[dict[str, Any]]:
        if not value:
            return []
        return [item for item in value if isinstance(item, dict)]


class AiResultV1(CamelModel):
    success: bool = True
    result: Any = None


class AiResultResponseV1(EnvelopeFields):
    data: AiResultV1
