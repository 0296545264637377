from __future__ import annotations

from typing import Optional

from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetchone
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, factory: ConnectionFactory):
        self._factory = factory

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._factory) as cur:
            cur.execute("SELECT setting_value FROM settings WHERE setting_key=%s", (key,))
            r = fetchone(cur)
            return r["setting_value"] if r else None

    def put(self, key: str, value: str) -> None:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                INSERT INTO settings(setting_key, setting_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value)
                """,
                (key, value),
            )
