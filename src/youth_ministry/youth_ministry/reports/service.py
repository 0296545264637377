from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

from ..attendance.repository import AttendanceRepository
from ..cancellations.repository import CancellationRepository
from ..core.enums import ServiceType
from ..students.repository import StudentRepository

NO_ATTENDANCE_MESSAGE = "No attendance recorded for this date."


@dataclass(frozen=True)
class AttendanceMessage:
    attendance_date: date
    service_type: ServiceType
    present_names: List[str]
    text: str


def _long_date(d: date) -> str:
    return f"{d:%A, %B} {d.day}, {d.year}"


class ParentReportService:
    """Builds the text pasted into the parents' group chat after class."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        cancellations: CancellationRepository,
    ):
        self._attendance = attendance
        self._students = students
        self._cancellations = cancellations

    def build_attendance_message(self, attendance_date: date, service_type: ServiceType = ServiceType.FRIDAY) -> AttendanceMessage:
        service_name = service_type.value.capitalize()
        cancellation = self._cancellations.get_for_date(attendance_date)
        if cancellation:
            reason = f" ({cancellation.reason})" if cancellation.reason else ""
            text = f"Youth Ministry - {service_name}\n{_long_date(attendance_date)}\n\nClass was cancelled{reason}."
            return AttendanceMessage(attendance_date, service_type, [], text)

        names = {s.student_id: s.name for s in self._students.list_active()}
        present: List[str] = []
        for record in self._attendance.list_for_date(attendance_date):
            if record.service_type != service_type or not record.attended:
                continue
            name = names.get(record.student_id)
            if name is None:
                student = self._students.get_by_id(record.student_id)
                name = student.name if student else f"Student #{record.student_id}"
            present.append(name)

        if not present:
            return AttendanceMessage(attendance_date, service_type, [], NO_ATTENDANCE_MESSAGE)

        present.sort(key=str.lower)
        lines = "\n".join(f"- {name}" for name in present)
        text = (
            f"Youth Ministry Attendance - {service_name}\n"
            f"{_long_date(attendance_date)}\n\n"
            f"Present ({len(present)}):\n{lines}\n\n"
            "God bless!"
        )
        return AttendanceMessage(attendance_date, service_type, present, text)
