from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.events import ChangeNotifier
from ..common.validators import optional_str, require_grade, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Student, StudentDraft
from .repository import StudentRepository

SORT_KEYS = {
    "name": lambda s: s.name.lower(),
    "grade": lambda s: (s.grade, s.name.lower()),
}


class StudentService:
    """Use case: roster management."""

    def __init__(self, students: StudentRepository, *, notifier: Optional[ChangeNotifier] = None):
        self._students = students
        self._notifier = notifier or ChangeNotifier()

    @staticmethod
    def _draft(data: dict) -> StudentDraft:
        dob = optional_str(data.get("date_of_birth"))
        try:
            date_of_birth: Optional[date] = parse_iso_date(dob) if dob else None
        except ValueError:
            raise ValidationError("Date of birth must be YYYY-MM-DD")

        return StudentDraft(
            name=require_non_empty(data.get("name") or "", "Name"),
            grade=require_grade(data.get("grade")),
            phone=optional_str(data.get("phone")),
            parent_phone=optional_str(data.get("parent_phone")),
            parent_email=optional_str(data.get("parent_email")),
            address=optional_str(data.get("address")),
            date_of_birth=date_of_birth,
            notes=optional_str(data.get("notes")),
        )

    def add_student(self, data: dict) -> int:
        student_id = self._students.create(self._draft(data))
        self._notifier.notify()
        return student_id

    def update_student(self, student_id: int, data: dict) -> None:
        draft = self._draft(data)
        self.get_student(student_id)
        # No-op updates report 0 affected rows in MySQL.
        self._students.update(int(student_id), draft)
        self._notifier.notify()

    def deactivate_student(self, student_id: int) -> None:
        self.get_student(student_id)
        self._students.set_active(int(student_id), is_active=False)
        self._notifier.notify()

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def list_active(self, *, search: Optional[str] = None, sort_by: str = "name") -> Sequence[Student]:
        if sort_by not in SORT_KEYS:
            raise ValidationError("sort_by must be 'name' or 'grade'")

        rows = list(self._students.list_active())
        needle = (search or "").strip().lower()
        if needle:
            rows = [s for s in rows if needle in s.name.lower()]
        rows.sort(key=SORT_KEYS[sort_by])
        return rows
