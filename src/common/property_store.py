"""
Small persistent key/value store for server-side properties.
It keeps values such as the AI service key and the default spreadsheet URL out of source control
and out of the browser, in a JSON file under the runtime directory.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Final

AI_API_KEY_PROPERTY: Final[str] = "CLAUDE_API_KEY"
SPREADSHEET_URL_PROPERTY: Final[str] = "SPREADSHEET_URL"


class PropertyStore:
    """Persist string properties as a flat JSON object."""

    def __init__(self, runtime_dir: Path | str, filename: str = "properties.json") -> None:
        self._runtime_dir = Path(runtime_dir)
        self._path = self._runtime_dir / filename
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str:
        with self._lock:
            return self._load().get(key, "")

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._write(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._write(data)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write(self, data: dict[str, str]) -> None:
        self._runtime_dir.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, sort_keys=True)
