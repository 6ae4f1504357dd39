# This file implements the AI-assisted data-entry helpers behind the proxy endpoints.
# It exists so prompts, key handling, and upstream errors live on the server, not in the browser.
# The API key comes from ANTHROPIC_API_KEY when set, otherwise from the property store.
# Upstream failures are logged and surfaced as AI_UPSTREAM_ERROR without echoing the key.

from __future__ import annotations

import logging
from typing import Any

from src.ai_proxy import prompts
from src.ai_proxy.claude_client import ClaudeApiError, ClaudeClient
from src.api.error_handlers import APIError, bad_request
from src.api.schemas.ai_schemas import (
    DEFAULT_BOOKLET_MEDIA_TYPE,
    DEFAULT_IMAGE_MEDIA_TYPE,
    ColumnAnalysisInput,
    DomainLookupInput,
    EnrichInput,
    SignupSheetInput,
)
from src.common.property_store import AI_API_KEY_PROPERTY, PropertyStore

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "sk-"
LOOKUP_MAX_TOKENS = 256
ANALYZE_MAX_TOKENS = 1024
DOCUMENT_MAX_TOKENS = 4096

NO_SERVER_KEY_MESSAGE = "No API key configured on server"
NO_SETTINGS_KEY_MESSAGE = "No Claude API key configured. Add one in Settings."


class AiService:
    def __init__(self, *, client: ClaudeClient, properties: PropertyStore, env_api_key: str = "") -> None:
        self.client = client
        self.properties = properties
        self.env_api_key = env_api_key

    def stored_api_key(self) -> str:
        return self.env_api_key or self.properties.get(AI_API_KEY_PROPERTY)

    def store_api_key(self, api_key: str) -> None:
        key = (api_key or "").strip()
        if not key.startswith(API_KEY_PREFIX):
            raise bad_request("Invalid API key format")
        self.properties.set(AI_API_KEY_PROPERTY, key)
        logger.info("Stored AI API key in %s", self.properties.path)

    def check_api_key(self) -> dict[str, bool]:
        return {"hasKey": bool(self.stored_api_key())}

    def lookup_domain(self, payload: DomainLookupInput) -> Any:
        key = self._require_key(NO_SERVER_KEY_MESSAGE)
        if not payload.domain:
            raise bad_request("No domain provided")
        return self._call(key, prompts.domain_lookup_prompt(payload.domain), LOOKUP_MAX_TOKENS)

    def analyze_columns(self, payload: ColumnAnalysisInput) -> Any:
        key = self._require_key(NO_SERVER_KEY_MESSAGE)
        if not payload.sample_data:
            raise bad_request("No sample data provided")
        if not payload.prompt:
            raise bad_request("No prompt provided")
        return self._call(key, payload.prompt, ANALYZE_MAX_TOKENS)

    def parse_signups(self, payload: SignupSheetInput) -> Any:
        key = self._require_key(NO_SETTINGS_KEY_MESSAGE)
        if not payload.image_data:
            raise bad_request("No image data provided")
        prompt = prompts.signup_sheet_prompt(payload.default_ministry, payload.ministry_names)
        media_type = payload.media_type or DEFAULT_IMAGE_MEDIA_TYPE
        content = [
            {"type": "image", "source": {"type": "base64", "media_type": media_type, "data": payload.image_data}},
            {"type": "text", "text": prompt},
        ]
        return self._call(key, content, DOCUMENT_MAX_TOKENS)

    def enrich(self, payload: EnrichInput) -> Any:
        key = self._require_key(NO_SETTINGS_KEY_MESSAGE)
        ministry_list = prompts.format_ministry_list(payload.existing_ministries)

        if payload.source_type == "booklet":
            if not payload.file_data:
                raise bad_request("No file data provided")
            media_type = payload.media_type or DEFAULT_BOOKLET_MEDIA_TYPE
            content = prompts.with_file(
                payload.file_data,
                media_type,
                prompts.booklet_enrichment_prompt(ministry_list),
            )
            return self._call(key, content, DOCUMENT_MAX_TOKENS)

        if payload.source_type == "spreadsheet":
            if not payload.sample_data:
                raise bad_request("No spreadsheet data provided")
            prompt = prompts.spreadsheet_enrichment_prompt(ministry_list, payload.sample_data)
            return self._call(key, prompt, DOCUMENT_MAX_TOKENS)

        raise bad_request(f"Unknown sourceType: {payload.source_type}")

    def _require_key(self, message: str) -> str:
        key = self.stored_api_key()
        if not key:
            raise bad_request(message)
        return key

    def _call(self, key: str, content: str | list[dict[str, Any]], max_tokens: int) -> Any:
        try:
            return self.client.create_message(key, content, max_tokens)
        except ClaudeApiError as exc:
            logger.warning("AI proxy call failed: %s", exc)
            raise APIError(status_code=502, error_code="AI_UPSTREAM_ERROR", message=str(exc)) from exc
