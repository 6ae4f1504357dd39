#!/usr/bin/env python3
"""
Upgrade a workbook created by an older release of the signup app.
Adds the Action column to App Signups and the organizer columns to Ministries when missing.
Each migration is a no-op when its columns already exist.
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
from src.workbook.bootstrap import add_action_column, add_organizer_columns

MIGRATIONS = {
    "action-column": add_action_column,
    "organizer-columns": add_organizer_columns,
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply column migrations to a signup workbook")
    parser.add_argument("--sheet-url", default=None, help="Spreadsheet URL; defaults to SPREADSHEET_URL")
    parser.add_argument(
        "--migration",
        choices=[*MIGRATIONS, "all"],
        default="all",
        help="Which migration to run",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()

    try:
        workbook = get_workbook_provider().open(args.sheet_url)
    except WorkbookUnavailableError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)

    selected = list(MIGRATIONS) if args.migration == "all" else [args.migration]
    applied = {name: MIGRATIONS[name](workbook) for name in selected}
    print(json.dumps({"applied": applied}, indent=2))


if __name__ == "__main__":
    main()
