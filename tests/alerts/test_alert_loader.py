from __future__ import annotations

from datetime import date

import pytest

from fakes import FakeAttendance, FakeCancellations, FakeStudents, FailingStudents, student
from youth_ministry.alerts.loader import AlertDataLoader
from youth_ministry.alerts.policies.strict_policy import StrictPresencePolicy
from youth_ministry.core.enums import AttendanceStatus
from youth_ministry.core.exceptions import DataLoadError


class FailingCancellations(FakeCancellations):
    def list_dates(self):
        raise TimeoutError("read timed out")


def _attendance_with(*rows):
    attendance = FakeAttendance()
    for student_id, day, status in rows:
        attendance.upsert(student_id=student_id, attendance_date=day, status=status)
    return attendance


def test_unreadable_roster_raises_data_load_error():
    loader = AlertDataLoader(FailingStudents(), FakeAttendance(), FakeCancellations())

    with pytest.raises(DataLoadError) as exc:
        loader.load()

    assert str(exc.value) == "could not load alerts"
    assert isinstance(exc.value.cause, ConnectionError)


def test_late_failure_does_not_return_partial_snapshot():
    loader = AlertDataLoader(FakeStudents([student(1, "A")]), FakeAttendance(), FailingCancellations())

    with pytest.raises(DataLoadError):
        loader.load()


def test_empty_store_is_a_valid_snapshot():
    snapshot = AlertDataLoader(FakeStudents(), FakeAttendance(), FakeCancellations()).load()

    assert snapshot.students == ()
    assert snapshot.attendance == ()
    assert snapshot.cancelled_dates == frozenset()


def test_snapshot_holds_active_students_presence_and_cancelled_dates():
    students = FakeStudents([student(1, "Active"), student(2, "Inactive", active=False)])
    attendance = _attendance_with(
        (1, date(2026, 2, 20), AttendanceStatus.PRESENT),
        (1, date(2026, 2, 27), AttendanceStatus.ABSENT),
        (1, date(2026, 2, 13), AttendanceStatus.LATE),
    )
    cancellations = FakeCancellations([date(2026, 1, 30)])

    snapshot = AlertDataLoader(students, attendance, cancellations).load()

    assert [s.student_id for s in snapshot.students] == [1]
    assert sorted(f.attendance_date for f in snapshot.attendance) == [date(2026, 2, 13), date(2026, 2, 20)]
    assert snapshot.cancelled_dates == frozenset({date(2026, 1, 30)})


def test_strict_policy_drops_late_rows():
    attendance = _attendance_with(
        (1, date(2026, 2, 20), AttendanceStatus.PRESENT),
        (1, date(2026, 2, 27), AttendanceStatus.LATE),
    )

    snapshot = AlertDataLoader(
        FakeStudents([student(1, "A")]),
        attendance,
        FakeCancellations(),
        policy=StrictPresencePolicy(),
    ).load()

    assert [f.attendance_date for f in snapshot.attendance] == [date(2026, 2, 20)]


def test_since_bound_is_passed_to_repository():
    attendance = FakeAttendance()

    AlertDataLoader(FakeStudents(), attendance, FakeCancellations()).load(since=date(2026, 1, 1))

    assert attendance.last_since == date(2026, 1, 1)


def test_since_bound_keeps_latest_older_presence_per_student():
    attendance = _attendance_with(
        (1, date(2025, 11, 7), AttendanceStatus.PRESENT),
        (1, date(2025, 12, 5), AttendanceStatus.PRESENT),
        (2, date(2025, 12, 12), AttendanceStatus.PRESENT),
        (2, date(2025, 11, 14), AttendanceStatus.PRESENT),
        (3, date(2026, 2, 6), AttendanceStatus.PRESENT),
    )
    cancellations = FakeCancellations([date(2025, 12, 12)])
    attendance.cancellations = cancellations

    snapshot = AlertDataLoader(FakeStudents(), attendance, cancellations).load(since=date(2026, 1, 1))

    assert sorted((f.student_id, f.attendance_date) for f in snapshot.attendance) == [
        (1, date(2025, 12, 5)),
        (2, date(2025, 11, 14)),
        (3, date(2026, 2, 6)),
    ]
