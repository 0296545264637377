"""Create the configured database (if needed) and apply database/schema.sql.

Usage: APP_ENV=development python scripts/init_db.py
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path[:0] = [str(p) for p in (REPO_ROOT, REPO_ROOT / "src" / "youth_ministry") if str(p) not in sys.path]

from dotenv import load_dotenv

from config import get_settings_module
from youth_ministry.database.bootstrap import apply_schema, list_tables

logger = logging.getLogger("init_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    load_dotenv(override=False)
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    logger.info("tables: %s", ", ".join(list_tables(db_config)))


if __name__ == "__main__":
    main()
