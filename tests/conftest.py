"""
Shared pytest setup: repo root on sys.path, a memory-backed environment, and a throwaway RUNTIME_DIR per test.
No test reaches Google Sheets or the AI service.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

TEST_ENV_DEFAULTS = {
    "PROJECT_NAME": "test-project",
    "ENV": "test",
    "LOG_LEVEL": "INFO",
    "WORKBOOK_BACKEND": "memory",
    "PARISH_TIMEZONE": "America/Chicago",
    "API_HOST": "0.0.0.0",
    "API_PORT": "8000",
    "AI_MAX_RETRIES": "0",
}

# `src.api.app` builds the app at import time, before fixtures run.
for _key, _value in TEST_ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _value)


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Ensure required environment variables are present during tests."""

    for key, value in TEST_ENV_DEFAULTS.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)
    monkeypatch.setenv("RUNTIME_DIR", str(tmp_path / "runtime"))
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
