# This file builds the JSON envelope every versioned endpoint returns.
# Each envelope carries the API and schema version, the request id, and a generation timestamp.
# Routers pass plain dictionaries; the declared response models validate them on the way out.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Protocol

from fastapi import Request


class VersionSource(Protocol):
    schema_version: str

    def api_version_label(self) -> str: ...


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def request_id_of(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def version_fields(config: VersionSource) -> dict[str, str]:
    return {"api_version": config.api_version_label(), "schema_version": config.schema_version}


def envelope_for(
    request: Request,
    config: VersionSource,
    data: dict[str, Any] | list[dict[str, Any]] | None,
    warnings: list[str] | None = None,
) -> dict[str, Any]:
    """Wrap `data` with version fields and the request's trace id."""

    return {
        **version_fields(config),
        "request_id": request_id_of(request),
        "generated_at": utc_now(),
        "data": data,
        "warnings": warnings,
    }


SUCCESS: dict[str, bool] = {"success": True}
