from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassCancellation
from .repository import CancellationRepository


class MySQLCancellationRepository(CancellationRepository):
    def __init__(self, factory: ConnectionFactory):
        self._factory = factory

    def get_for_date(self, cancellation_date: date) -> Optional[ClassCancellation]:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                SELECT cancellation_id, cancellation_date, reason, marked_by_servant_id
                FROM class_cancellations
                WHERE cancellation_date=%s
                """,
                (cancellation_date,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ClassCancellation(
                cancellation_id=int(r["cancellation_id"]),
                cancellation_date=r["cancellation_date"],
                reason=r.get("reason"),
                marked_by_servant_id=r.get("marked_by_servant_id"),
            )

    def create(self, *, cancellation_date: date, reason: Optional[str], marked_by_servant_id: Optional[int]) -> int:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                INSERT INTO class_cancellations(cancellation_date, reason, marked_by_servant_id)
                VALUES(%s,%s,%s)
                """,
                (cancellation_date, reason, marked_by_servant_id),
            )
            return int(cur.lastrowid)

    def delete_for_date(self, cancellation_date: date) -> bool:
        with db_cursor(self._factory) as cur:
            cur.execute("DELETE FROM class_cancellations WHERE cancellation_date=%s", (cancellation_date,))
            return cur.rowcount > 0

    def list_dates(self) -> Sequence[Any]:
        with db_cursor(self._factory) as cur:
            cur.execute("SELECT DISTINCT cancellation_date FROM class_cancellations")
            return [r["cancellation_date"] for r in fetchall(cur)]
