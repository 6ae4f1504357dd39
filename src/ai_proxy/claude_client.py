# This file implements the server-side client for the Anthropic Messages API.
# It exists so the browser never holds the API key: every AI helper goes through this client.
# Transient failures (429, 529, timeouts) are retried with jittered exponential backoff.
# Any other failure surfaces as one exception type the service layer can turn into an error body.

from __future__ import annotations

import json
import logging
import random
import re
import time
from collections.abc import Callable
from typing import Any

import requests

LOGGER = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 529})
CODE_FENCE_PATTERN = re.compile(r"```json\s*|```\s*")


class ClaudeApiError(RuntimeError):
    """Raised when the Messages API cannot produce a usable reply."""


def extract_result(text: str) -> Any:
    """Strip markdown code fences and parse JSON, falling back to the cleaned text."""

    cleaned = CODE_FENCE_PATTERN.sub("", text).strip()
    try:
        return json.loads(cleaned)
    except ValueError:
        return cleaned


def backoff_delay(attempt: int, base_seconds: float) -> float:
    base = base_seconds * (2**attempt)
    return random.uniform(base * 0.95, base * 1.35)


class ClaudeClient:
    def __init__(
        self,
        *,
        api_url: str,
        model: str,
        api_version: str,
        timeout_seconds: float = 60.0,
        max_retries: int = 2,
        backoff_seconds: float = 1.0,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.api_url = api_url
        self.model = model
        self.api_version = api_version
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self.session = session or requests.Session()
        self._sleep = sleep

    def create_message(self, api_key: str, content: str | list[dict[str, Any]], max_tokens: int) -> Any:
        """Send one user message and return the parsed first text block."""

        payload = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": content}],
        }
        headers = {
            "x-api-key": api_key,
            "anthropic-version": self.api_version,
            "content-type": "application/json",
        }
        response = self._post_with_retries(payload, headers)

        if response.status_code != 200:
            raise ClaudeApiError(f"Claude API returned {response.status_code}")
        try:
            body = response.json()
            text = body["content"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ClaudeApiError("Claude API returned an unexpected response") from exc
        return extract_result(str(text))

    def _post_with_retries(self, payload: dict[str, Any], headers: dict[str, str]) -> requests.Response:
        attempt = 0
        while True:
            try:
                response = self.session.post(
                    self.api_url,
                    json=payload,
                    headers=headers,
                    timeout=self.timeout_seconds,
                )
            except requests.Timeout as exc:
                if attempt >= self.max_retries:
                    raise ClaudeApiError(f"Claude API request timed out after {attempt + 1} attempts") from exc
                LOGGER.warning("Claude API request timed out (attempt %s); retrying", attempt + 1)
            except requests.RequestException as exc:
                raise ClaudeApiError(f"Claude API request failed: {exc}") from exc
            else:
                if response.status_code not in RETRYABLE_STATUS_CODES or attempt >= self.max_retries:
                    return response
                LOGGER.warning(
                    "Claude API returned %s (attempt %s); retrying",
                    response.status_code,
                    attempt + 1,
                )

            self._sleep(backoff_delay(attempt, self.backoff_seconds))
            attempt += 1
