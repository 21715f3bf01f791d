from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_records.school_records.database.bootstrap import apply_schema, list_tables, missing_tables
from src.school_records.school_records.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_url(settings.DB_URL, secret=settings.DB_SECRET)

    count = apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"OK: Applied schema.sql -> {db_config.describe()} ({count} statements, tables={len(list_tables(db_config))})")

    missing = missing_tables(db_config)
    if missing:
        raise SystemExit(f"Missing tables after migration: {', '.join(missing)}")


if __name__ == "__main__":
    main()
