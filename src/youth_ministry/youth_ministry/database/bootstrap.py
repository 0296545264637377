"""Apply ``database/schema.sql`` and ``database/seed.sql`` to a MySQL target.

The SQL files carry their own ``CREATE DATABASE`` / ``USE`` lines for use from
the mysql client; those are dropped here so the configured database wins.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, List

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

_DATABASE_DIRECTIVE = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE|USE)\b[^;]*;\s*$")

# A quoted literal, a line comment, or a statement terminator.
_TOKEN = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|--[^\n]*|;", re.S)


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ``;`` outside quotes, dropping ``--`` comments."""

    parts: List[str] = []
    pos = 0
    for match in _TOKEN.finditer(sql):
        token = match.group(0)
        parts.append(sql[pos:match.start()])
        pos = match.end()
        if token == ";":
            statement = "".join(parts).strip()
            parts = []
            if statement:
                yield statement
        elif not token.startswith("--"):
            parts.append(token)

    statement = ("".join(parts) + sql[pos:]).strip()
    if statement:
        yield statement


def _connect(target: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(**target.connect_kwargs(with_database=with_database))


def _execute_script(target: DBConfig, path: Path) -> int:
    sql = _DATABASE_DIRECTIVE.sub("", path.read_text(encoding="utf-8"))
    conn = _connect(target)
    try:
        cur = conn.cursor()
        executed = 0
        for statement in iter_sql_statements(sql):
            cur.execute(statement)
            executed += 1
        conn.commit()
        return executed
    except mysql.connector.Error:
        conn.rollback()
        logger.error("failed applying %s to %s", path.name, target.describe(), exc_info=True)
        raise
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    target = DBConfig.from_dict(db_config)
    executed = _execute_script(target, Path(schema_path))
    logger.info("schema: %s statements applied to %s", executed, target.describe())


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    executed = _execute_script(target, Path(seed_path))
    logger.info("seed: %s statements applied to %s", executed, target.describe())


def list_tables(db_config: dict) -> List[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
