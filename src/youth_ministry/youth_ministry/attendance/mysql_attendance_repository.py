from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus, ServiceType
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, PresenceFact
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        service_type=ServiceType(r.get("service_type") or ServiceType.FRIDAY.value),
        marked_by_servant_id=r.get("marked_by_servant_id"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, factory: ConnectionFactory):
        self._factory = factory

    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                SELECT attendance_id, student_id, attendance_date, status, service_type, marked_by_servant_id
                FROM attendance_records
                WHERE student_id=%s AND attendance_date=%s
                """,
                (int(student_id), attendance_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(
        self,
        *,
        student_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        service_type: ServiceType,
        marked_by_servant_id: Optional[int] = None,
    ) -> int:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                INSERT INTO attendance_records(student_id, attendance_date, status, service_type, marked_by_servant_id)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    service_type=VALUES(service_type),
                    marked_by_servant_id=VALUES(marked_by_servant_id)
                """,
                (int(student_id), attendance_date, status.value, service_type.value, marked_by_servant_id),
            )

            # If it was an update, lastrowid can be 0; fetch attendance_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT attendance_id FROM attendance_records WHERE student_id=%s AND attendance_date=%s",
                (int(student_id), attendance_date),
            )
            r = fetchone(cur)
            return int(r["attendance_id"]) if r else 0

    def list_for_date(self, attendance_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                SELECT attendance_id, student_id, attendance_date, status, service_type, marked_by_servant_id
                FROM attendance_records
                WHERE attendance_date=%s
                """,
                (attendance_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_recent_for_student(self, student_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                SELECT attendance_id, student_id, attendance_date, status, service_type, marked_by_servant_id
                FROM attendance_records
                WHERE student_id=%s
                ORDER BY attendance_date DESC
                LIMIT %s
                """,
                (int(student_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_presence(
        self,
        *,
        statuses: Iterable[AttendanceStatus],
        since: Optional[date] = None,
    ) -> Sequence[PresenceFact]:
        values = [s.value for s in statuses]
        if not values:
            return []

        clauses = [f"status IN ({', '.join(['%s'] * len(values))})"]
        params: list[object] = list(values)
        if since is not None:
            clauses.append("attendance_date >= %s")
            params.append(since)

        where = " AND ".join(clauses)

        with db_cursor(self._factory) as cur:
            cur.execute(
                f"""
                SELECT student_id, attendance_date, status
                FROM attendance_records
                WHERE {where}
                """,
                tuple(params),
            )
            return [
                PresenceFact(
                    student_id=int(r["student_id"]),
                    attendance_date=r["attendance_date"],
                    status=AttendanceStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]

    def list_latest_presence(
        self,
        *,
        statuses: Iterable[AttendanceStatus],
        before: date,
    ) -> Sequence[PresenceFact]:
        values = [s.value for s in statuses]
        if not values:
            return []

        with db_cursor(self._factory) as cur:
            cur.execute(
                f"""
                SELECT a.student_id, MAX(a.attendance_date) AS attendance_date
                FROM attendance_records a
                LEFT JOIN class_cancellations c ON c.cancellation_date = a.attendance_date
                WHERE a.status IN ({', '.join(['%s'] * len(values))})
                  AND a.attendance_date < %s
                  AND c.cancellation_id IS NULL
                GROUP BY a.student_id
                """,
                (*values, before),
            )
            return [
                PresenceFact(student_id=int(r["student_id"]), attendance_date=r["attendance_date"])
                for r in fetchall(cur)
            ]
