from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..cancellations.repository import CancellationRepository
from ..common.events import ChangeNotifier
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, ServiceType
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from ..students.service import SORT_KEYS
from .model import AttendanceRecord, RollCallRow
from .repository import AttendanceRepository


@dataclass(frozen=True)
class RollCall:
    attendance_date: date
    is_cancelled: bool
    rows: List[RollCallRow]

    @property
    def present_count(self) -> int:
        return sum(1 for r in self.rows if r.present)

    @property
    def total_count(self) -> int:
        return len(self.rows)


class AttendanceService:
    """Use case: taking attendance for a class date."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        cancellations: CancellationRepository,
        *,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self._attendance = attendance
        self._students = students
        self._cancellations = cancellations
        self._notifier = notifier or ChangeNotifier()

    def _require_open_date(self, attendance_date: date) -> None:
        if self._cancellations.get_for_date(attendance_date):
            raise ValidationError("Class is cancelled for this date")

    def mark_attendance(
        self,
        *,
        student_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        marked_by: Optional[int] = None,
        service_type: ServiceType = ServiceType.FRIDAY,
    ) -> int:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        if not student.is_active:
            raise ValidationError("Student is not active")
        self._require_open_date(attendance_date)

        attendance_id = self._attendance.upsert(
            student_id=int(student_id),
            attendance_date=attendance_date,
            status=status,
            service_type=service_type,
            marked_by_servant_id=marked_by,
        )
        self._notifier.notify()
        return attendance_id

    def toggle_attendance(self, *, student_id: int, attendance_date: date, marked_by: Optional[int] = None) -> AttendanceStatus:
        """Flip present <-> absent; a missing record becomes present."""

        current = self._attendance.get_for_student_and_date(int(student_id), attendance_date)
        new_status = AttendanceStatus.ABSENT if current and current.attended else AttendanceStatus.PRESENT
        self.mark_attendance(
            student_id=student_id,
            attendance_date=attendance_date,
            status=new_status,
            marked_by=marked_by,
        )
        return new_status

    def roll_call(self, attendance_date: date, *, sort_by: str = "name") -> RollCall:
        if sort_by not in SORT_KEYS:
            raise ValidationError("sort_by must be 'name' or 'grade'")

        by_student = {r.student_id: r.status for r in self._attendance.list_for_date(attendance_date)}
        students = sorted(self._students.list_active(), key=SORT_KEYS[sort_by])
        rows = [
            RollCallRow(student_id=s.student_id, name=s.name, grade=s.grade, status=by_student.get(s.student_id))
            for s in students
        ]
        return RollCall(
            attendance_date=attendance_date,
            is_cancelled=self._cancellations.get_for_date(attendance_date) is not None,
            rows=rows,
        )

    def history(self, student_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> List[AttendanceRecord]:
        if not self._students.get_by_id(int(student_id)):
            raise NotFoundError("Student not found")
        return list(self._attendance.list_recent_for_student(int(student_id), int(limit)))
