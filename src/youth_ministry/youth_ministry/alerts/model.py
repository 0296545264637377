from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, FrozenSet, List, Optional, Tuple

from ..attendance.model import PresenceFact
from ..core.enums import AlertSeverity, AlertStatus
from ..students.model import Student


@dataclass(frozen=True)
class AlertSnapshot:
    """Everything the absence calculation reads, fetched in one go."""

    students: Tuple[Student, ...]
    attendance: Tuple[PresenceFact, ...]
    cancelled_dates: FrozenSet[Any] = field(default_factory=frozenset)


@dataclass(frozen=True)
class AbsenceResult:
    student: Student
    weeks_absent: int
    last_present_date: Optional[date]


@dataclass(frozen=True)
class AlertView:
    """Read-model handed to the presentation layer."""

    student_id: int
    name: str
    grade: int
    weeks_absent: int
    last_present_date: Optional[date]
    first_name: str
    suggested_message: str
    severity: AlertSeverity

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "name": self.name,
            "grade": self.grade,
            "weeks_absent": self.weeks_absent,
            "last_present_date": self.last_present_date.isoformat() if self.last_present_date else None,
            "first_name": self.first_name,
            "suggested_message": self.suggested_message,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class AbsenceAlert:
    """Persisted alert routed to one servant.

    Note: This is derived data. It is refreshed from the computation and
    never read back to compute a new one.
    """

    alert_id: int
    student_id: int
    servant_id: int
    weeks_absent: int
    computed_at: datetime
    status: AlertStatus = AlertStatus.PENDING
    followed_up_by_servant_id: Optional[int] = None
    followed_up_at: Optional[datetime] = None
    student_name: Optional[str] = None
    student_phone: Optional[str] = None
    student_grade: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "alert_id": self.alert_id,
            "student_id": self.student_id,
            "servant_id": self.servant_id,
            "weeks_absent": self.weeks_absent,
            "computed_at": self.computed_at.isoformat(),
            "status": self.status.value,
            "followed_up_by_servant_id": self.followed_up_by_servant_id,
            "followed_up_at": self.followed_up_at.isoformat() if self.followed_up_at else None,
            "student": {
                "name": self.student_name,
                "phone": self.student_phone,
                "grade": self.student_grade,
            },
        }


@dataclass(frozen=True)
class GenerationSummary:
    upserted: int
    unassigned_student_ids: List[int]
