# This file defines the API process configuration: versioning, workbook backend, and AI proxy.
# Each field maps to one environment variable in `ENV_VARS`; unset or blank variables keep the model default.
# Validators reject a malformed version prefix, an unknown backend or timezone, and bad AI timeouts.

from __future__ import annotations

import os
from collections.abc import Callable
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

WORKBOOK_BACKENDS = frozenset({"google", "memory"})
TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "n", "off"})


class ApiConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    api_name: str = "Ministry Fair Signup API"
    api_version_path: str = "/api/v1"
    schema_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "local"
    enable_request_logging: bool = False
    allowed_origins: list[str] = Field(default_factory=list)
    app_version: str = "0.1.0"
    timezone: str = "America/Chicago"
    workbook_backend: str = "google"
    spreadsheet_url: str = ""
    google_credentials_path: str | None = None
    runtime_dir: str = "runtime"
    ai_api_url: str = "https://api.anthropic.com/v1/messages"
    ai_model: str = "claude-sonnet-4-5-20250929"
    ai_api_version: str = "2023-06-01"
    ai_timeout_seconds: float = 60.0
    ai_max_retries: int = 2
    ai_api_key: str = ""

    @field_validator("api_version_path")
    @classmethod
    def validate_api_version_path(cls, value: str) -> str:
        segments = [segment for segment in value.split("/") if segment]
        if not value.startswith("/") or len(segments) < 2 or not segments[-1].startswith("v"):
            raise ValueError(f"api_version_path must look like '/api/v1', got {value!r}")
        return "/" + "/".join(segments)

    @field_validator("workbook_backend")
    @classmethod
    def validate_workbook_backend(cls, value: str) -> str:
        backend = value.strip().lower()
        if backend not in WORKBOOK_BACKENDS:
            raise ValueError(f"workbook_backend must be one of {sorted(WORKBOOK_BACKENDS)}, got {value!r}")
        return backend

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value!r}") from exc
        return value

    @field_validator("ai_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("ai_timeout_seconds must be positive.")
        return value

    @field_validator("ai_max_retries")
    @classmethod
    def validate_retries(cls, value: int) -> int:
        if value < 0:
            raise ValueError("ai_max_retries must not be negative.")
        return value

    def api_version_label(self) -> str:
        """`/api/v1` -> `v1`."""

        return self.api_version_path.rsplit("/", 1)[-1]


def parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def parse_list(name: str, raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _plain(name: str, raw: str) -> str:
    return raw.strip()


ENV_VARS: dict[str, tuple[str, Callable[[str, str], object]]] = {
    "api_name": ("API_NAME", _plain),
    "api_version_path": ("API_VERSION_PATH", _plain),
    "schema_version": ("API_SCHEMA_VERSION", _plain),
    "host": ("API_HOST", _plain),
    "port": ("API_PORT", lambda name, raw: int(raw)),
    "environment": ("ENV", _plain),
    "enable_request_logging": ("API_ENABLE_REQUEST_LOGGING", parse_bool),
    "allowed_origins": ("API_ALLOWED_ORIGINS", parse_list),
    "app_version": ("APP_VERSION", _plain),
    "timezone": ("PARISH_TIMEZONE", _plain),
    "workbook_backend": ("WORKBOOK_BACKEND", _plain),
    "spreadsheet_url": ("SPREADSHEET_URL", _plain),
    "google_credentials_path": ("GOOGLE_APPLICATION_CREDENTIALS", _plain),
    "runtime_dir": ("RUNTIME_DIR", _plain),
    "ai_api_url": ("AI_API_URL", _plain),
    "ai_model": ("AI_MODEL", _plain),
    "ai_api_version": ("AI_API_VERSION", _plain),
    "ai_timeout_seconds": ("AI_TIMEOUT_SECONDS", lambda name, raw: float(raw)),
    "ai_max_retries": ("AI_MAX_RETRIES", lambda name, raw: int(raw)),
    "ai_api_key": ("ANTHROPIC_API_KEY", _plain),
}


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Build `ApiConfig` from `.env` (optionally) and the process environment."""

    if load_env:
        load_dotenv()

    values: dict[str, object] = {}
    for field, (env_name, parse) in ENV_VARS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip():
            values[field] = parse(env_name, raw)
    return ApiConfig.model_validate(values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    return load_api_config()
