"""Bulk-import members or kids from a CSV file.

Usage: python scripts/import_csv.py <members|kids> <file.csv>
"""
from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from config import get_settings_module

from congregation_attendance.auth.identity import Identity
from congregation_attendance.common.logging import configure_logging, get_logger
from congregation_attendance.core.enums import Cohort
from congregation_attendance.database.connection import DBConfig, DatabaseConnection
from congregation_attendance.imports.service import ImportService
from congregation_attendance.people.mysql_person_repository import MySQLPersonRepository

logger = get_logger("import_csv")


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(__doc__.strip(), file=sys.stderr)
        return 2

    try:
        cohort = Cohort(argv[0])
    except ValueError:
        print(f"Unknown cohort: {argv[0]}", file=sys.stderr)
        return 2

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    csv_text = Path(argv[1]).read_text(encoding="utf-8")
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))
    service = ImportService(MySQLPersonRepository(conn))

    caller = Identity(subject=getattr(settings, "SCRIPT_SUBJECT", "script"), claims={})
    result = service.bulk_import(caller=caller, cohort=cohort, csv_text=csv_text)
    print(json.dumps(result.to_dict()))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
