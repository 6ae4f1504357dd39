#!/usr/bin/env python3
"""
Create every tab the signup app needs in the configured workbook.
Seeds the Ministries tab with example ministries the first time it is created.
Run it once per spreadsheet; existing tabs are left untouched.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.api.dependencies import get_workbook_provider
from src.common.logging import configure_logging
from src.workbook.base import WorkbookUnavailableError
from src.workbook.bootstrap import setup_workbook


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the signup app's tabs in a workbook")
    parser.add_argument("--sheet-url", default=None, help="Spreadsheet URL; defaults to SPREADSHEET_URL")
    parser.add_argument("--no-seed", action="store_true", help="Do not add example ministries")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()

    try:
        workbook = get_workbook_provider().open(args.sheet_url)
    except WorkbookUnavailableError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)

    created = setup_workbook(workbook, seed_examples=not args.no_seed)
    print(json.dumps({"created_tabs": created}, indent=2))


if __name__ == "__main__":
    main()
