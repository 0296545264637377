from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..students.model import Student
from .model import Servant, ServantAssignment


class ServantRepository(Protocol):
    def get_by_id(self, servant_id: int) -> Optional[Servant]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Servant]:
        raise NotImplementedError

    def create(self, *, name: str, phone: Optional[str], email: Optional[str], is_admin: bool) -> int:
        raise NotImplementedError


class AssignmentRepository(Protocol):
    """Student -> servant mapping; a student has at most one servant."""

    def assign(self, *, student_id: int, servant_id: int) -> None:
        """Create or replace the assignment for ``student_id``."""

        raise NotImplementedError

    def unassign(self, *, student_id: int) -> bool:
        raise NotImplementedError

    def servant_for(self, student_id: int) -> Optional[int]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ServantAssignment]:
        raise NotImplementedError

    def list_students_for(self, servant_id: int) -> Sequence[Student]:
        raise NotImplementedError
