#!/usr/bin/env python3
"""
Save server-side properties: the AI service API key and the default spreadsheet URL.
Values are written to the property store under RUNTIME_DIR, never to source control.
Exits non-zero when the key does not look like an API key.
"""

from __future__ import annotations

import argparse
import getpass
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.api.dependencies import get_ai_service, get_property_store
from src.api.error_handlers import APIError
from src.common.logging import configure_logging
from src.common.property_store import SPREADSHEET_URL_PROPERTY


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Store the AI API key and default spreadsheet URL")
    parser.add_argument("--key", default=None, help="API key; prompted for when omitted")
    parser.add_argument("--spreadsheet-url", default=None, help="Also save the default spreadsheet URL")
    parser.add_argument("--skip-key", action="store_true", help="Only save the spreadsheet URL")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()

    if args.spreadsheet_url:
        get_property_store().set(SPREADSHEET_URL_PROPERTY, args.spreadsheet_url.strip())
        print("Spreadsheet URL saved.")

    if args.skip_key:
        return

    key = args.key or getpass.getpass("API key: ")
    try:
        get_ai_service().store_api_key(key)
    except APIError as exc:
        print(exc.message, file=sys.stderr)
        sys.exit(1)
    print("API key saved.")


if __name__ == "__main__":
    main()
