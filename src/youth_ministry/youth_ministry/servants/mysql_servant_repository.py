from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import ConnectionFactory
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from ..students.model import Student
from ..students.mysql_student_repository import row_to_student
from .model import Servant, ServantAssignment
from .repository import AssignmentRepository, ServantRepository


def _to_servant(r: dict) -> Servant:
    return Servant(
        servant_id=int(r["servant_id"]),
        name=r["name"],
        phone=r.get("phone"),
        email=r.get("email"),
        is_admin=as_bool(r.get("is_admin")),
    )


class MySQLServantRepository(ServantRepository):
    def __init__(self, factory: ConnectionFactory):
        self._factory = factory

    def get_by_id(self, servant_id: int) -> Optional[Servant]:
        with db_cursor(self._factory) as cur:
            cur.execute(
                "SELECT servant_id, name, phone, email, is_admin FROM servants WHERE servant_id=%s",
                (int(servant_id),),
            )
            row = fetchone(cur)
            return _to_servant(row) if row else None

    def list_all(self) -> Sequence[Servant]:
        with db_cursor(self._factory) as cur:
            cur.execute("SELECT servant_id, name, phone, email, is_admin FROM servants ORDER BY name ASC")
            return [_to_servant(r) for r in fetchall(cur)]

    def create(self, *, name: str, phone: Optional[str], email: Optional[str], is_admin: bool) -> int:
        with db_cursor(self._factory) as cur:
            cur.execute(
                "INSERT INTO servants(name, phone, email, is_admin) VALUES(%s,%s,%s,%s)",
                (name, phone, email, 1 if is_admin else 0),
            )
            return int(cur.lastrowid)


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, factory: ConnectionFactory):
        self._factory = factory

    def assign(self, *, student_id: int, servant_id: int) -> None:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                INSERT INTO servant_assignments(student_id, servant_id)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE servant_id=VALUES(servant_id), assigned_at=CURRENT_TIMESTAMP
                """,
                (int(student_id), int(servant_id)),
            )

    def unassign(self, *, student_id: int) -> bool:
        with db_cursor(self._factory) as cur:
            cur.execute("DELETE FROM servant_assignments WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0

    def servant_for(self, student_id: int) -> Optional[int]:
        with db_cursor(self._factory) as cur:
            cur.execute("SELECT servant_id FROM servant_assignments WHERE student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return int(row["servant_id"]) if row else None

    def list_all(self) -> Sequence[ServantAssignment]:
        with db_cursor(self._factory) as cur:
            cur.execute("SELECT student_id, servant_id FROM servant_assignments")
            return [
                ServantAssignment(student_id=int(r["student_id"]), servant_id=int(r["servant_id"]))
                for r in fetchall(cur)
            ]

    def list_students_for(self, servant_id: int) -> Sequence[Student]:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                SELECT s.student_id, s.name, s.grade, s.is_active, s.phone, s.parent_phone,
                       s.parent_email, s.address, s.date_of_birth, s.notes
                FROM servant_assignments sa
                JOIN students s ON s.student_id = sa.student_id
                WHERE sa.servant_id=%s
                ORDER BY s.name ASC
                """,
                (int(servant_id),),
            )
            return [row_to_student(r) for r in fetchall(cur)]
