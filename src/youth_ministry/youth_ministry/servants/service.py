from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import optional_str, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import Servant, ServantAssignment
from .repository import AssignmentRepository, ServantRepository


class ServantService:
    """Use case: manage servants and which students they look after."""

    def __init__(self, servants: ServantRepository, assignments: AssignmentRepository, students: StudentRepository):
        self._servants = servants
        self._assignments = assignments
        self._students = students

    def add_servant(self, *, name: str, phone: Optional[str] = None, email: Optional[str] = None, is_admin: bool = False) -> int:
        name = require_non_empty(name, "Name")
        email = optional_str(email)
        if email and "@" not in email:
            raise ValidationError("Email is not valid")
        return self._servants.create(name=name, phone=optional_str(phone), email=email, is_admin=bool(is_admin))

    def list_servants(self) -> Sequence[Servant]:
        return self._servants.list_all()

    def get_servant(self, servant_id: int) -> Servant:
        servant = self._servants.get_by_id(int(servant_id))
        if not servant:
            raise NotFoundError("Servant not found")
        return servant

    def assign_student(self, *, servant_id: int, student_id: int) -> None:
        self.get_servant(servant_id)
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        if not student.is_active:
            raise ValidationError("Cannot assign an inactive student")
        self._assignments.assign(student_id=int(student_id), servant_id=int(servant_id))

    def unassign_student(self, *, student_id: int) -> None:
        if not self._assignments.unassign(student_id=int(student_id)):
            raise NotFoundError("Student has no servant assigned")

    def list_assigned_students(self, servant_id: int) -> Sequence[Student]:
        self.get_servant(servant_id)
        return [s for s in self._assignments.list_students_for(int(servant_id)) if s.is_active]

    def servant_for(self, student_id: int) -> Optional[int]:
        return self._assignments.servant_for(int(student_id))

    def list_assignments(self) -> Sequence[ServantAssignment]:
        return sorted(self._assignments.list_all(), key=lambda a: (a.servant_id, a.student_id))
