from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from youth_ministry.alerts.model import AbsenceAlert
from youth_ministry.attendance.model import AttendanceRecord, PresenceFact
from youth_ministry.cancellations.model import ClassCancellation
from youth_ministry.container import AlertOptions, assemble_container
from youth_ministry.core.enums import AlertStatus, AttendanceStatus, ServiceType
from youth_ministry.servants.model import Servant, ServantAssignment
from youth_ministry.students.model import Student, StudentDraft


class FakeStudents:
    def __init__(self, students: Iterable[Student] = ()):
        self.by_id: Dict[int, Student] = {s.student_id: s for s in students}
        self._id = max(self.by_id, default=0)

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.by_id.get(student_id)

    def list_active(self):
        return [s for s in self.by_id.values() if s.is_active]

    def create(self, draft: StudentDraft) -> int:
        self._id += 1
        self.by_id[self._id] = Student(student_id=self._id, is_active=True, **draft.__dict__)
        return self._id

    def update(self, student_id: int, draft: StudentDraft) -> bool:
        current = self.by_id.get(student_id)
        if not current:
            return False
        self.by_id[student_id] = replace(current, **draft.__dict__)
        return True

    def set_active(self, student_id: int, *, is_active: bool) -> bool:
        current = self.by_id.get(student_id)
        if not current:
            return False
        self.by_id[student_id] = replace(current, is_active=is_active)
        return True


class FailingStudents(FakeStudents):
    def list_active(self):
        raise ConnectionError("database unreachable")


class FakeAttendance:
    def __init__(self):
        self._by_key: Dict[Tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.raw_presence: List[PresenceFact] = []
        self.last_since: Optional[date] = None
        self.cancellations: Optional["FakeCancellations"] = None

    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((student_id, attendance_date))

    def upsert(self, *, student_id, attendance_date, status, service_type=ServiceType.FRIDAY, marked_by_servant_id=None) -> int:
        existing = self._by_key.get((student_id, attendance_date))
        if existing:
            attendance_id = existing.attendance_id
        else:
            self._id += 1
            attendance_id = self._id
        self._by_key[(student_id, attendance_date)] = AttendanceRecord(
            attendance_id=attendance_id,
            student_id=student_id,
            attendance_date=attendance_date,
            status=status,
            service_type=service_type,
            marked_by_servant_id=marked_by_servant_id,
        )
        return attendance_id

    def list_for_date(self, attendance_date: date):
        return [r for (_, d), r in self._by_key.items() if d == attendance_date]

    def list_recent_for_student(self, student_id: int, limit: int):
        items = [r for r in self._by_key.values() if r.student_id == student_id]
        items.sort(key=lambda r: r.attendance_date, reverse=True)
        return items[:limit]

    def list_presence(self, *, statuses, since=None):
        self.last_since = since
        wanted = set(statuses)
        facts = [
            PresenceFact(student_id=r.student_id, attendance_date=r.attendance_date, status=r.status)
            for r in self._by_key.values()
            if r.status in wanted and (since is None or r.attendance_date >= since)
        ]
        # Rows written by other tools, possibly with unparsable dates.
        facts.extend(f for f in self.raw_presence if f.status in wanted)
        return facts

    def list_latest_presence(self, *, statuses, before):
        wanted = set(statuses)
        cancelled = set(self.cancellations.list_dates()) if self.cancellations else set()
        latest: Dict[int, date] = {}
        for r in self._by_key.values():
            if r.status not in wanted or r.attendance_date >= before or r.attendance_date in cancelled:
                continue
            if r.student_id not in latest or r.attendance_date > latest[r.student_id]:
                latest[r.student_id] = r.attendance_date
        return [PresenceFact(student_id=k, attendance_date=v) for k, v in latest.items()]


class FakeCancellations:
    def __init__(self, dates: Iterable[date] = ()):
        self.by_date: Dict[date, ClassCancellation] = {}
        for d in dates:
            self.create(cancellation_date=d, reason=None, marked_by_servant_id=None)

    def get_for_date(self, cancellation_date: date) -> Optional[ClassCancellation]:
        return self.by_date.get(cancellation_date)

    def create(self, *, cancellation_date, reason, marked_by_servant_id) -> int:
        cancellation_id = len(self.by_date) + 1
        self.by_date[cancellation_date] = ClassCancellation(
            cancellation_id=cancellation_id,
            cancellation_date=cancellation_date,
            reason=reason,
            marked_by_servant_id=marked_by_servant_id,
        )
        return cancellation_id

    def delete_for_date(self, cancellation_date: date) -> bool:
        return self.by_date.pop(cancellation_date, None) is not None

    def list_dates(self):
        return list(self.by_date)


@dataclass
class FakeSettings:
    values: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def put(self, key: str, value: str) -> None:
        self.values[key] = value


class FakeServants:
    def __init__(self, servants: Iterable[Servant] = ()):
        self.by_id: Dict[int, Servant] = {s.servant_id: s for s in servants}

    def get_by_id(self, servant_id: int) -> Optional[Servant]:
        return self.by_id.get(servant_id)

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda s: s.name)

    def create(self, *, name, phone, email, is_admin) -> int:
        servant_id = max(self.by_id, default=0) + 1
        self.by_id[servant_id] = Servant(servant_id=servant_id, name=name, phone=phone, email=email, is_admin=is_admin)
        return servant_id


class FakeAssignments:
    def __init__(self, students: FakeStudents, mapping: Optional[Dict[int, int]] = None):
        self._students = students
        self.servant_by_student: Dict[int, int] = dict(mapping or {})

    def assign(self, *, student_id: int, servant_id: int) -> None:
        self.servant_by_student[student_id] = servant_id

    def unassign(self, *, student_id: int) -> bool:
        return self.servant_by_student.pop(student_id, None) is not None

    def servant_for(self, student_id: int) -> Optional[int]:
        return self.servant_by_student.get(student_id)

    def list_all(self):
        return [ServantAssignment(student_id=k, servant_id=v) for k, v in self.servant_by_student.items()]

    def list_students_for(self, servant_id: int):
        return [self._students.by_id[k] for k, v in self.servant_by_student.items() if v == servant_id]


class FakeAlerts:
    def __init__(self):
        self.by_id: Dict[int, AbsenceAlert] = {}

    def _find(self, student_id: int, servant_id: int) -> Optional[AbsenceAlert]:
        for a in self.by_id.values():
            if a.student_id == student_id and a.servant_id == servant_id:
                return a
        return None

    def upsert(self, *, student_id: int, servant_id: int, weeks_absent: int, computed_at: datetime) -> int:
        existing = self._find(student_id, servant_id)
        if existing:
            self.by_id[existing.alert_id] = replace(existing, weeks_absent=weeks_absent, computed_at=computed_at)
            return existing.alert_id
        alert_id = len(self.by_id) + 1
        self.by_id[alert_id] = AbsenceAlert(
            alert_id=alert_id,
            student_id=student_id,
            servant_id=servant_id,
            weeks_absent=weeks_absent,
            computed_at=computed_at,
        )
        return alert_id

    def get_by_id(self, alert_id: int) -> Optional[AbsenceAlert]:
        return self.by_id.get(alert_id)

    def mark_followed_up(self, *, alert_id: int, by_servant_id: int, at: datetime) -> bool:
        alert = self.by_id.get(alert_id)
        if not alert or alert.status != AlertStatus.PENDING:
            return False
        self.by_id[alert_id] = replace(
            alert,
            status=AlertStatus.FOLLOWED_UP,
            followed_up_by_servant_id=by_servant_id,
            followed_up_at=at,
        )
        return True

    def list_for_servant(self, servant_id: int, *, status=None):
        rows = [a for a in self.by_id.values() if a.servant_id == servant_id and (status is None or a.status == status)]
        rows.sort(key=lambda a: (a.computed_at, a.alert_id), reverse=True)
        return rows


def student(student_id: int, name: str, *, grade: int = 9, active: bool = True) -> Student:
    return Student(student_id=student_id, name=name, grade=grade, is_active=active)


def presence(student_id: int, day, status: AttendanceStatus = AttendanceStatus.PRESENT) -> PresenceFact:
    return PresenceFact(student_id=student_id, attendance_date=day, status=status)


@dataclass
class Repos:
    students: FakeStudents
    attendance: FakeAttendance
    cancellations: FakeCancellations
    settings: FakeSettings
    servants: FakeServants
    assignments: FakeAssignments
    alerts: FakeAlerts


def make_repos(students: Iterable[Student] = (), servants: Iterable[Servant] = ()) -> Repos:
    students_repo = FakeStudents(students)
    attendance = FakeAttendance()
    cancellations = FakeCancellations()
    attendance.cancellations = cancellations
    return Repos(
        students=students_repo,
        attendance=attendance,
        cancellations=cancellations,
        settings=FakeSettings(),
        servants=FakeServants(servants),
        assignments=FakeAssignments(students_repo),
        alerts=FakeAlerts(),
    )


def make_container(repos: Repos, options: Optional[AlertOptions] = None):
    return assemble_container(
        students_repo=repos.students,
        servants_repo=repos.servants,
        assignments_repo=repos.assignments,
        attendance_repo=repos.attendance,
        cancellations_repo=repos.cancellations,
        settings_repo=repos.settings,
        alerts_repo=repos.alerts,
        options=options,
    )
