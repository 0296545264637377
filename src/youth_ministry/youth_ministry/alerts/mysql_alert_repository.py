from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AlertStatus
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AbsenceAlert
from .repository import AlertRepository

_SELECT = """
    SELECT
        a.alert_id, a.student_id, a.servant_id, a.weeks_absent, a.computed_at,
        a.status, a.followed_up_by_servant_id, a.followed_up_at,
        s.name AS student_name, s.phone AS student_phone, s.grade AS student_grade
    FROM absence_alerts a
    JOIN students s ON s.student_id = a.student_id
"""


def _to_alert(r: dict) -> AbsenceAlert:
    return AbsenceAlert(
        alert_id=int(r["alert_id"]),
        student_id=int(r["student_id"]),
        servant_id=int(r["servant_id"]),
        weeks_absent=int(r["weeks_absent"]),
        computed_at=r["computed_at"],
        status=AlertStatus(r["status"]),
        followed_up_by_servant_id=r.get("followed_up_by_servant_id"),
        followed_up_at=r.get("followed_up_at"),
        student_name=r.get("student_name"),
        student_phone=r.get("student_phone"),
        student_grade=r.get("student_grade"),
    )


class MySQLAlertRepository(AlertRepository):
    def __init__(self, factory: ConnectionFactory):
        self._factory = factory

    def upsert(self, *, student_id: int, servant_id: int, weeks_absent: int, computed_at: datetime) -> int:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                INSERT INTO absence_alerts(student_id, servant_id, weeks_absent, computed_at, status)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE weeks_absent=VALUES(weeks_absent), computed_at=VALUES(computed_at)
                """,
                (int(student_id), int(servant_id), int(weeks_absent), computed_at, AlertStatus.PENDING.value),
            )

            # If it was an update, lastrowid can be 0; fetch alert_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT alert_id FROM absence_alerts WHERE student_id=%s AND servant_id=%s",
                (int(student_id), int(servant_id)),
            )
            r = fetchone(cur)
            return int(r["alert_id"]) if r else 0

    def get_by_id(self, alert_id: int) -> Optional[AbsenceAlert]:
        with db_cursor(self._factory) as cur:
            cur.execute(_SELECT + " WHERE a.alert_id=%s", (int(alert_id),))
            r = fetchone(cur)
            return _to_alert(r) if r else None

    def mark_followed_up(self, *, alert_id: int, by_servant_id: int, at: datetime) -> bool:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                UPDATE absence_alerts
                SET status=%s, followed_up_by_servant_id=%s, followed_up_at=%s
                WHERE alert_id=%s AND status=%s
                """,
                (
                    AlertStatus.FOLLOWED_UP.value,
                    int(by_servant_id),
                    at,
                    int(alert_id),
                    AlertStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def list_for_servant(self, servant_id: int, *, status: Optional[AlertStatus] = None) -> Sequence[AbsenceAlert]:
        clauses = ["a.servant_id=%s"]
        params: list[object] = [int(servant_id)]
        if status is not None:
            clauses.append("a.status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._factory) as cur:
            cur.execute(
                _SELECT + f" WHERE {where} ORDER BY a.computed_at DESC, a.alert_id DESC",
                tuple(params),
            )
            return [_to_alert(r) for r in fetchall(cur)]
