# This file defines signup and new-parishioner endpoints under the versioned API path.
# It exists so the public form can record signups and the consoles can list them.
# Recording is public; listing all signups and new parishioners is admin-only, and
# leaders get their own ministries' signups through `/signups/leader`.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.dependencies import ConfigDep, get_signup_service
from src.api.response_envelope import SUCCESS, envelope_for
from src.api.schemas.common import ActionResponseV1
from src.api.schemas.signup_schemas import (
    NewParishionerListResponseV1,
    SignupInput,
    SignupListResponseV1,
)
from src.api.services.signup_service import SignupService

router = APIRouter(tags=["signups"])
SignupServiceDep = Annotated[SignupService, Depends(get_signup_service)]


@router.post("/signups", response_model=ActionResponseV1, status_code=201)
def record_signup(
    request: Request,
    payload: SignupInput,
    service: SignupServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    service.record_signup(payload)
    return envelope_for(request, config, SUCCESS)


@router.get("/signups", response_model=SignupListResponseV1)
def list_signups(
    request: Request,
    service: SignupServiceDep,
    config: ConfigDep,
    email: str | None = Query(default=None),
) -> dict[str, object]:
    return envelope_for(request, config, service.list_signups(email))


@router.get("/signups/leader", response_model=SignupListResponseV1)
def list_leader_signups(
    request: Request,
    service: SignupServiceDep,
    config: ConfigDep,
    email: str | None = Query(default=None),
) -> dict[str, object]:
    return envelope_for(request, config, service.list_leader_signups(email))


@router.get("/new-parishioners", response_model=NewParishionerListResponseV1)
def list_new_parishioners(
    request: Request,
    service: SignupServiceDep,
    config: ConfigDep,
    email: str | None = Query(default=None),
) -> dict[str, object]:
    return envelope_for(request, config, service.list_new_parishioners(email))
