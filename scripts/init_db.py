"""Create the worktime tables and the default config row.

Usage: APP_ENV=production python scripts/init_db.py
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.worktime.worktime.database.bootstrap import apply_schema, ensure_default_config, list_tables
from src.worktime.worktime.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    ensure_default_config(db_config)

    target = DBConfig.from_mapping(db_config).describe()
    print(f"OK: {target} tables: {', '.join(sorted(list_tables(db_config)))}")


if __name__ == "__main__":
    main()
