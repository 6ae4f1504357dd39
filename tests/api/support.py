# This file provides shared helpers for API endpoint tests.
# It exists so tests can swap in an in-memory workbook and a fake AI client without real credentials.
# The helpers build consistent config objects, seeded workbooks, and scoped TestClient contexts.
# Centralized test wiring keeps API tests small and focused on behavior.

from __future__ import annotations

import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi.testclient import TestClient

from src.ai_proxy.claude_client import ClaudeApiError
from src.api.api_config import ApiConfig
from src.api.app import app
from src.api.dependencies import (
    get_ai_service,
    get_clock,
    get_config,
    get_property_store,
    get_workbook_provider,
)
from src.api.services.ai_service import AiService
from src.common.property_store import PropertyStore
from src.workbook.bootstrap import setup_workbook
from src.workbook.layout import ADMINS_SHEET
from src.workbook.memory import MemoryWorkbook
from src.workbook.provider import WorkbookProvider

ADMIN_EMAIL = "admin@parish.org"
# Organizer of the seeded "music" ministry.
LEADER_EMAIL = "jane@parish.org"
PARISHIONER_EMAIL = "visitor@example.com"

# 3/14/26 10:05 AM in America/Chicago (CDT).
FIXED_NOW = datetime(2026, 3, 14, 15, 5, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


def build_test_config(**overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test Signup API",
        "api_version_path": "/api/v1",
        "schema_version": "1.0.0",
        "host": "0.0.0.0",
        "port": 8000,
        "environment": "test",
        "enable_request_logging": False,
        "allowed_origins": [],
        "app_version": "0.1.0",
        "timezone": "America/Chicago",
        "workbook_backend": "memory",
        "spreadsheet_url": "",
        "runtime_dir": "runtime",
        "ai_max_retries": 0,
        "ai_api_key": "",
    }
    values.update(overrides)
    return ApiConfig(**values)


def seeded_workbook(*, admins: tuple[str, ...] = (ADMIN_EMAIL,)) -> MemoryWorkbook:
    """Workbook with every app tab, the example ministries, and the given admins."""

    workbook = MemoryWorkbook()
    setup_workbook(workbook)
    sheet = workbook.worksheet(ADMINS_SHEET)
    for email in admins:
        sheet.append_row([email, "Parish Admin", "1/1/26"])
    return workbook


class FakeClaudeClient:
    """Records calls and returns a canned result, or raises when `error` is set."""

    def __init__(self, *, result: Any = None, error: str | None = None) -> None:
        self.result = result if result is not None else {"ok": True}
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def create_message(self, api_key: str, content: Any, max_tokens: int) -> Any:
        self.calls.append({"api_key": api_key, "content": content, "max_tokens": max_tokens})
        if self.error is not None:
            raise ClaudeApiError(self.error)
        return self.result


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    workbook: MemoryWorkbook | None = None,
    claude_client: FakeClaudeClient | None = None,
    properties: PropertyStore | None = None,
    provider: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()
    resolved_client = claude_client or FakeClaudeClient()

    with tempfile.TemporaryDirectory() as runtime_dir:
        resolved_properties = properties or PropertyStore(runtime_dir)
        resolved_provider = provider or WorkbookProvider(
            backend="memory",
            properties=resolved_properties,
            memory_workbook=workbook if workbook is not None else seeded_workbook(),
        )
        ai_service = AiService(
            client=resolved_client,
            properties=resolved_properties,
            env_api_key=resolved_config.ai_api_key,
        )

        app.dependency_overrides[get_config] = lambda: resolved_config
        app.dependency_overrides[get_clock] = lambda: fixed_clock
        app.dependency_overrides[get_property_store] = lambda: resolved_properties
        app.dependency_overrides[get_workbook_provider] = lambda: resolved_provider
        app.dependency_overrides[get_ai_service] = lambda: ai_service

        try:
            with TestClient(app) as client:
                yield client
        finally:
            app.dependency_overrides.clear()
