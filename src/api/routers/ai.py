# This file defines the AI proxy endpoints under the versioned API path.
# It exists so data-entry helpers (domain lookup, column mapping, roster photos, booklet enrichment)
# can call the AI service through the server, which holds the API key.
# Upstream failures come back as 502 AI_UPSTREAM_ERROR error bodies.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import ConfigDep, get_ai_service
from src.api.response_envelope import SUCCESS, envelope_for
from src.api.schemas.ai_schemas import (
    AiResultResponseV1,
    ApiKeyInput,
    ApiKeyStatusResponseV1,
    ColumnAnalysisInput,
    DomainLookupInput,
    EnrichInput,
    SignupSheetInput,
)
from src.api.schemas.common import ActionResponseV1
from src.api.services.ai_service import AiService

router = APIRouter(prefix="/ai", tags=["ai"])
AiServiceDep = Annotated[AiService, Depends(get_ai_service)]


def _result(result: object) -> dict[str, object]:
    return {"success": True, "result": result}


@router.post("/api-key", response_model=ActionResponseV1)
def store_api_key(
    request: Request,
    payload: ApiKeyInput,
    service: AiServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    service.store_api_key(payload.api_key)
    return envelope_for(request, config, SUCCESS)


@router.get("/api-key", response_model=ApiKeyStatusResponseV1)
def check_api_key(request: Request, service: AiServiceDep, config: ConfigDep) -> dict[str, object]:
    return envelope_for(request, config, service.check_api_key())


@router.post("/lookup", response_model=AiResultResponseV1)
def lookup_domain(
    request: Request,
    payload: DomainLookupInput,
    service: AiServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    return envelope_for(request, config, _result(service.lookup_domain(payload)))


@router.post("/analyze", response_model=AiResultResponseV1)
def analyze_columns(
    request: Request,
    payload: ColumnAnalysisInput,
    service: AiServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    return envelope_for(request, config, _result(service.analyze_columns(payload)))


@router.post("/parse-signups", response_model=AiResultResponseV1)
def parse_signups(
    request: Request,
    payload: SignupSheetInput,
    service: AiServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    return envelope_for(request, config, _result(service.parse_signups(payload)))


@router.post("/enrich", response_model=AiResultResponseV1)
def enrich(
    request: Request,
    payload: EnrichInput,
    service: AiServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    return envelope_for(request, config, _result(service.enrich(payload)))
