# This file defines role verification endpoints under the versioned API path.
# It exists so the front end can decide which console (admin, leader, or none) to show for an email.
# Both checks read the Admins and Ministries tabs of the requested workbook.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.dependencies import ConfigDep, get_access_policy
from src.api.response_envelope import envelope_for
from src.api.schemas.admin_schemas import VerifyAdminResponseV1, VerifyUserResponseV1
from src.api.security import AccessPolicy

router = APIRouter(prefix="/auth", tags=["auth"])
PolicyDep = Annotated[AccessPolicy, Depends(get_access_policy)]


@router.get("/verify-admin", response_model=VerifyAdminResponseV1)
def verify_admin(
    request: Request,
    policy: PolicyDep,
    config: ConfigDep,
    email: str | None = Query(default=None),
) -> dict[str, object]:
    return envelope_for(request, config, policy.verify_admin(email))


@router.get("/verify-user", response_model=VerifyUserResponseV1)
def verify_user(
    request: Request,
    policy: PolicyDep,
    config: ConfigDep,
    email: str | None = Query(default=None),
) -> dict[str, object]:
    return envelope_for(request, config, policy.verify_user(email))
