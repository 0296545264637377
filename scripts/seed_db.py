"""Load the demo roster from database/seed.sql (run init_db.py first)."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path[:0] = [str(p) for p in (REPO_ROOT, REPO_ROOT / "src" / "youth_ministry") if str(p) not in sys.path]

from dotenv import load_dotenv

from config import get_settings_module
from youth_ministry.database.bootstrap import apply_seed_sql


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    load_dotenv(override=False)
    apply_seed_sql(dict(importlib.import_module(get_settings_module()).DB_CONFIG), seed_path=REPO_ROOT / "database" / "seed.sql")


if __name__ == "__main__":
    main()
