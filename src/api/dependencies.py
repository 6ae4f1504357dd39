# This file provides dependency factories for FastAPI routes.
# It exists so shared clients are created once and per-request services are built in one place.
# The workbook is resolved per request because callers may point at a different sheet with `sheetUrl`.
# Tests override the cached factories through `app.dependency_overrides`.

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from src.ai_proxy.claude_client import ClaudeClient
from src.api.api_config import ApiConfig, get_api_config
from src.api.security import AccessPolicy
from src.api.services.admin_service import AdminService
from src.api.services.ai_service import AiService
from src.api.services.followup_service import FollowupService
from src.api.services.ministry_service import MinistryService
from src.api.services.signup_service import SignupService
from src.common.property_store import PropertyStore
from src.common.timefmt import Clock, utc_clock
from src.workbook.base import Workbook
from src.workbook.provider import WorkbookProvider


def get_config() -> ApiConfig:
    return get_api_config()


@lru_cache(maxsize=1)
def get_property_store() -> PropertyStore:
    config = get_api_config()
    return PropertyStore(config.runtime_dir)


@lru_cache(maxsize=1)
def get_workbook_provider() -> WorkbookProvider:
    config = get_api_config()
    return WorkbookProvider(
        backend=config.workbook_backend,
        properties=get_property_store(),
        default_url=config.spreadsheet_url,
        credentials_path=config.google_credentials_path,
    )


@lru_cache(maxsize=1)
def get_claude_client() -> ClaudeClient:
    config = get_api_config()
    return ClaudeClient(
        api_url=config.ai_api_url,
        model=config.ai_model,
        api_version=config.ai_api_version,
        timeout_seconds=config.ai_timeout_seconds,
        max_retries=config.ai_max_retries,
    )


@lru_cache(maxsize=1)
def get_ai_service() -> AiService:
    config = get_api_config()
    return AiService(
        client=get_claude_client(),
        properties=get_property_store(),
        env_api_key=config.ai_api_key,
    )


def get_clock() -> Clock:
    return utc_clock


ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ProviderDep = Annotated[WorkbookProvider, Depends(get_workbook_provider)]
ClockDep = Annotated[Clock, Depends(get_clock)]


def get_workbook(request: Request, provider: ProviderDep) -> Workbook:
    """Open the workbook named by `sheetUrl`; failures surface as 503 WORKBOOK_UNAVAILABLE."""

    return provider.open(request.query_params.get("sheetUrl"))


WorkbookDep = Annotated[Workbook, Depends(get_workbook)]


def get_access_policy(workbook: WorkbookDep) -> AccessPolicy:
    return AccessPolicy(workbook)


def get_ministry_service(workbook: WorkbookDep) -> MinistryService:
    return MinistryService(workbook=workbook)


def get_signup_service(workbook: WorkbookDep, config: ConfigDep, clock: ClockDep) -> SignupService:
    return SignupService(workbook=workbook, timezone=config.timezone, clock=clock)


def get_admin_service(workbook: WorkbookDep, config: ConfigDep, clock: ClockDep) -> AdminService:
    return AdminService(workbook=workbook, timezone=config.timezone, clock=clock)


def get_followup_service(workbook: WorkbookDep, config: ConfigDep, clock: ClockDep) -> FollowupService:
    return FollowupService(workbook=workbook, timezone=config.timezone, clock=clock)
