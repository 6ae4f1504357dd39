# This file defines follow-up questionnaire endpoints under the versioned API path.
# It exists so leaders can publish per-round questions and volunteers can answer them.
# Reading questions and submitting answers are public; saving questions and reading answers
# are limited to admins and the ministry's own leaders.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.dependencies import ConfigDep, get_followup_service
from src.api.response_envelope import SUCCESS, envelope_for
from src.api.schemas.common import ActionResponseV1
from src.api.schemas.followup_schemas import (
    FollowupQuestionsInput,
    FollowupQuestionsResponseV1,
    FollowupResponseInput,
    FollowupResponseListResponseV1,
)
from src.api.services.followup_service import FollowupService

router = APIRouter(prefix="/followups", tags=["followups"])
FollowupServiceDep = Annotated[FollowupService, Depends(get_followup_service)]


@router.get("/responses", response_model=FollowupResponseListResponseV1)
def list_responses(
    request: Request,
    service: FollowupServiceDep,
    config: ConfigDep,
    email: str | None = Query(default=None),
    ministry_id: str | None = Query(default=None, alias="ministryId"),
) -> dict[str, object]:
    return envelope_for(request, config, service.list_responses(email, ministry_id))


@router.post("/responses", response_model=ActionResponseV1, status_code=201)
def submit_response(
    request: Request,
    payload: FollowupResponseInput,
    service: FollowupServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    service.submit_response(payload)
    return envelope_for(request, config, SUCCESS)


@router.get("/{ministry_id}/questions", response_model=FollowupQuestionsResponseV1)
def get_questions(
    request: Request,
    ministry_id: str,
    service: FollowupServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    return envelope_for(request, config, service.get_questions(ministry_id))


@router.put("/{ministry_id}/questions", response_model=ActionResponseV1)
def save_questions(
    request: Request,
    ministry_id: str,
    payload: FollowupQuestionsInput,
    service: FollowupServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    service.save_questions(payload.admin_email, ministry_id, payload.rounds)
    return envelope_for(request, config, SUCCESS)
