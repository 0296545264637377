from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..core.enums import AttendanceStatus, ServiceType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: attendance for one (student, date) pair."""

    attendance_id: int
    student_id: int
    attendance_date: date
    status: AttendanceStatus
    service_type: ServiceType = ServiceType.FRIDAY
    marked_by_servant_id: Optional[int] = None

    @property
    def attended(self) -> bool:
        return self.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


@dataclass(frozen=True)
class PresenceFact:
    """Read-model for absence computation: "student was seen on this date".

    ``attendance_date`` is left as the stored value; it is normalized (and
    rejected if malformed) by the calculator, not by the loader.
    """

    student_id: int
    attendance_date: Any
    status: AttendanceStatus = AttendanceStatus.PRESENT


@dataclass(frozen=True)
class RollCallRow:
    student_id: int
    name: str
    grade: int
    status: Optional[AttendanceStatus]

    @property
    def present(self) -> bool:
        return self.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)
