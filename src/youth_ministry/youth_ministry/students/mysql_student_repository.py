from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import ConnectionFactory
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Student, StudentDraft
from .repository import StudentRepository

_COLUMNS = """
    student_id, name, grade, is_active, phone, parent_phone,
    parent_email, address, date_of_birth, notes
"""


def row_to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        name=r["name"],
        grade=int(r["grade"]),
        is_active=as_bool(r.get("is_active"), default=True),
        phone=r.get("phone"),
        parent_phone=r.get("parent_phone"),
        parent_email=r.get("parent_email"),
        address=r.get("address"),
        date_of_birth=r.get("date_of_birth"),
        notes=r.get("notes"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, factory: ConnectionFactory):
        self._factory = factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return row_to_student(row) if row else None

    def list_active(self) -> Sequence[Student]:
        with db_cursor(self._factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE is_active=1 ORDER BY name ASC")
            return [row_to_student(r) for r in fetchall(cur)]

    def create(self, draft: StudentDraft) -> int:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                INSERT INTO students(name, grade, is_active, phone, parent_phone,
                                     parent_email, address, date_of_birth, notes)
                VALUES(%s,%s,1,%s,%s,%s,%s,%s,%s)
                """,
                (
                    draft.name,
                    draft.grade,
                    draft.phone,
                    draft.parent_phone,
                    draft.parent_email,
                    draft.address,
                    draft.date_of_birth,
                    draft.notes,
                ),
            )
            return int(cur.lastrowid)

    def update(self, student_id: int, draft: StudentDraft) -> bool:
        with db_cursor(self._factory) as cur:
            cur.execute(
                """
                UPDATE students
                SET name=%s, grade=%s, phone=%s, parent_phone=%s, parent_email=%s,
                    address=%s, date_of_birth=%s, notes=%s
                WHERE student_id=%s
                """,
                (
                    draft.name,
                    draft.grade,
                    draft.phone,
                    draft.parent_phone,
                    draft.parent_email,
                    draft.address,
                    draft.date_of_birth,
                    draft.notes,
                    int(student_id),
                ),
            )
            return cur.rowcount > 0

    def set_active(self, student_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._factory) as cur:
            cur.execute(
                "UPDATE students SET is_active=%s WHERE student_id=%s",
                (1 if is_active else 0, int(student_id)),
            )
            return cur.rowcount > 0
