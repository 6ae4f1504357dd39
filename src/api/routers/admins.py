# This file defines admin roster endpoints under the versioned API path.
# Every call requires the requester to already be an admin.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.dependencies import ConfigDep, get_admin_service
from src.api.response_envelope import SUCCESS, envelope_for
from src.api.schemas.admin_schemas import AdminInput, AdminListResponseV1
from src.api.schemas.common import ActionResponseV1
from src.api.services.admin_service import AdminService

router = APIRouter(prefix="/admins", tags=["admins"])
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]


@router.get("", response_model=AdminListResponseV1)
def list_admins(
    request: Request,
    service: AdminServiceDep,
    config: ConfigDep,
    email: str | None = Query(default=None),
) -> dict[str, object]:
    return envelope_for(request, config, service.list_admins(email))


@router.post("", response_model=ActionResponseV1, status_code=201)
def add_admin(
    request: Request,
    payload: AdminInput,
    service: AdminServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    service.add_admin(payload.admin_email, payload.email, payload.name)
    return envelope_for(request, config, SUCCESS)


@router.delete("/{target_email}", response_model=ActionResponseV1)
def remove_admin(
    request: Request,
    target_email: str,
    service: AdminServiceDep,
    config: ConfigDep,
    email: str | None = Query(default=None, description="Email of the admin making the change."),
) -> dict[str, object]:
    service.remove_admin(email, target_email)
    return envelope_for(request, config, SUCCESS)
