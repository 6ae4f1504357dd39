# This file defines liveness, readiness, and version endpoints.
# Readiness opens the configured workbook and looks for the Ministries tab.
# These routes sit outside the versioned prefix and never raise for an unreachable workbook.

from __future__ import annotations

import subprocess
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import ConfigDep, ProviderDep, get_ai_service
from src.api.response_envelope import request_id_of, utc_now, version_fields
from src.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse
from src.api.services.ai_service import AiService
from src.workbook.base import WorkbookUnavailableError
from src.workbook.layout import MINISTRIES_SHEET

router = APIRouter(tags=["health"])
AiServiceDep = Annotated[AiService, Depends(get_ai_service)]


@lru_cache(maxsize=1)
def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return completed.stdout.strip() or None


def _base_fields(request: Request, config: ConfigDep) -> dict[str, object]:
    return {**version_fields(config), "request_id": request_id_of(request), "timestamp": utc_now()}


@router.get("/health", response_model=HealthResponse)
def health(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        **_base_fields(request, config),
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(
    request: Request,
    config: ConfigDep,
    provider: ProviderDep,
    ai_service: AiServiceDep,
) -> dict[str, object]:
    detail = None
    connected = False
    ministries_ready = False
    try:
        workbook = provider.open(request.query_params.get("sheetUrl"))
        connected = workbook.can_connect()
        ministries_ready = connected and workbook.worksheet(MINISTRIES_SHEET) is not None
    except WorkbookUnavailableError as exc:
        detail = str(exc)
    if connected and not ministries_ready:
        detail = f"Workbook has no {MINISTRIES_SHEET} tab"

    return {
        **_base_fields(request, config),
        "ready": connected and ministries_ready,
        "workbook_backend": provider.backend,
        "workbook_connected": connected,
        "ministries_sheet_ready": ministries_ready,
        "ai_key_configured": ai_service.check_api_key()["hasKey"],
        "detail": detail,
    }


@router.get("/version", response_model=VersionResponse)
def version(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        **_base_fields(request, config),
        "service_name": config.api_name,
        "app_version": config.app_version,
        "api_version_path": config.api_version_path,
        "git_commit": _git_commit(),
    }
