# This file defines the single-endpoint `/exec` routes used by the web-app front end.
# It exists so clients that send `?action=...` (GET) or an action JSON body (POST) keep working.
# Both routes always answer HTTP 200; failures are reported inside the JSON body.
# Malformed POST bodies become `{success: false, error}` instead of a validation error.

from __future__ import annotations

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from src.api.dependencies import ClockDep, ConfigDep, ProviderDep, get_ai_service
from src.api.services.ai_service import AiService
from src.api.services.legacy_dispatch import LegacyDispatcher

router = APIRouter(tags=["legacy"])
AiServiceDep = Annotated[AiService, Depends(get_ai_service)]


def get_dispatcher(
    request: Request,
    provider: ProviderDep,
    config: ConfigDep,
    clock: ClockDep,
    ai_service: AiServiceDep,
) -> LegacyDispatcher:
    sheet_url = request.query_params.get("sheetUrl")
    return LegacyDispatcher(
        open_workbook=lambda: provider.open(sheet_url),
        timezone=config.timezone,
        clock=clock,
        ai_service=ai_service,
    )


DispatcherDep = Annotated[LegacyDispatcher, Depends(get_dispatcher)]


@router.get("/exec")
def exec_get(request: Request, dispatcher: DispatcherDep) -> dict[str, Any]:
    return dispatcher.handle_get(request.query_params)


@router.post("/exec")
async def exec_post(request: Request, dispatcher: DispatcherDep) -> dict[str, Any]:
    raw = await request.body()
    try:
        data = json.loads(raw or b"{}")
    except ValueError:
        return {"success": False, "error": "Request body is not valid JSON"}
    return await run_in_threadpool(dispatcher.handle_post, data)
