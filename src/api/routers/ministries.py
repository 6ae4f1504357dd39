# This file defines ministry list, tab scan, and ministry edit endpoints under the versioned API path.
# It exists so the signup page and the admin console read the same ministry list contract.
# Reads are public; edits require the requester (`adminEmail`, or `email` on deletes) to be an admin.
# Every response is wrapped in the standard envelope.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.dependencies import ConfigDep, get_ministry_service
from src.api.response_envelope import SUCCESS, envelope_for
from src.api.schemas.common import ActionResponseV1
from src.api.schemas.ministry_schemas import (
    MinistryInput,
    MinistryListResponseV1,
    SheetScanResponseV1,
)
from src.api.services.ministry_service import MinistryService

router = APIRouter(prefix="/ministries", tags=["ministries"])
MinistryServiceDep = Annotated[MinistryService, Depends(get_ministry_service)]


@router.get("", response_model=MinistryListResponseV1, response_model_exclude_none=True)
def list_ministries(
    request: Request,
    service: MinistryServiceDep,
    config: ConfigDep,
    sheet: str | None = Query(default=None, description="Tab to read; defaults to Ministries."),
) -> dict[str, object]:
    return envelope_for(request, config, service.list_ministries(sheet))


@router.get("/scan", response_model=SheetScanResponseV1)
def scan_sheets(
    request: Request,
    service: MinistryServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    return envelope_for(request, config, service.scan_sheets())


@router.post("", response_model=ActionResponseV1, status_code=201)
def add_ministry(
    request: Request,
    payload: MinistryInput,
    service: MinistryServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    service.add_ministry(payload.admin_email, payload)
    return envelope_for(request, config, SUCCESS)


@router.put("/{ministry_id}", response_model=ActionResponseV1)
def update_ministry(
    request: Request,
    ministry_id: str,
    payload: MinistryInput,
    service: MinistryServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    service.update_ministry(payload.admin_email, ministry_id, payload)
    return envelope_for(request, config, SUCCESS)


@router.delete("/{ministry_id}", response_model=ActionResponseV1)
def delete_ministry(
    request: Request,
    ministry_id: str,
    service: MinistryServiceDep,
    config: ConfigDep,
    email: str | None = Query(default=None),
) -> dict[str, object]:
    service.delete_ministry(email, ministry_id)
    return envelope_for(request, config, SUCCESS)
