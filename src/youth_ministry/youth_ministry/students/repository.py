from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, StudentDraft


class StudentRepository(Protocol):
    """Repository interface for Student.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, draft: StudentDraft) -> int:
        raise NotImplementedError

    def update(self, student_id: int, draft: StudentDraft) -> bool:
        raise NotImplementedError

    def set_active(self, student_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError
