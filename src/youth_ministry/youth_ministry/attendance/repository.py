from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, ServiceType
from .model import AttendanceRecord, PresenceFact


class AttendanceRepository(Protocol):
    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        student_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        service_type: ServiceType,
        marked_by_servant_id: Optional[int] = None,
    ) -> int:
        """Insert or overwrite the record keyed by (student_id, attendance_date).

        Returns attendance_id.
        """

        raise NotImplementedError

    def list_for_date(self, attendance_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_recent_for_student(self, student_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_presence(
        self,
        *,
        statuses: Iterable[AttendanceStatus],
        since: Optional[date] = None,
    ) -> Sequence[PresenceFact]:
        """Facts with one of ``statuses``, optionally on or after ``since``."""

        raise NotImplementedError

    def list_latest_presence(
        self,
        *,
        statuses: Iterable[AttendanceStatus],
        before: date,
    ) -> Sequence[PresenceFact]:
        """Per student, the latest fact dated before ``before`` that is not on a cancelled date."""

        raise NotImplementedError
