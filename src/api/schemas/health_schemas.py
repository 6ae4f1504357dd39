"""Response models for the operational endpoints (/health, /ready, /version)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class OperationalResponse(BaseModel):
    api_version: str
    schema_version: str
    request_id: str
    timestamp: datetime


class HealthResponse(OperationalResponse):
    status: str
    environment: str
    service_name: str


class ReadinessResponse(OperationalResponse):
    ready: bool
    workbook_backend: str
    workbook_connected: bool
    ministries_sheet_ready: bool
    ai_key_configured: bool
    detail: str | None = None


class VersionResponse(OperationalResponse):
    service_name: str
    app_version: str
    api_version_path: str
    git_commit: str | None = None
