from __future__ import annotations

from datetime import date, datetime, timedelta

from fakes import presence, student
from youth_ministry.alerts.calculator import compute_absences, weeks_since
from youth_ministry.attendance.model import PresenceFact


def _weeks(results):
    return {r.student.student_id: r.weeks_absent for r in results}


def test_never_present_student_gets_ceiling_and_no_last_date(fixed_now):
    results = compute_absences([student(1, "Mina Fawzy")], [], [], fixed_now)

    assert len(results) == 1
    assert results[0].weeks_absent == 6
    assert results[0].last_present_date is None


def test_week_boundary_uses_whole_weeks(fixed_now):
    today = fixed_now.date()
    students = [student(1, "Thirteen Days"), student(2, "Fourteen Days")]
    attendance = [presence(1, today - timedelta(days=13)), presence(2, today - timedelta(days=14))]

    assert _weeks(compute_absences(students, attendance, [], fixed_now)) == {1: 1, 2: 2}


def test_present_today_is_zero_weeks(fixed_now):
    results = compute_absences([student(1, "Kirollos Adel")], [presence(1, fixed_now.date())], [], fixed_now)

    assert results[0].weeks_absent == 0
    assert results[0].last_present_date == fixed_now.date()


def test_absence_is_capped_at_ceiling(fixed_now):
    long_ago = fixed_now.date() - timedelta(days=200)
    results = compute_absences([student(1, "Long Gone")], [presence(1, long_ago)], [], fixed_now)

    assert results[0].weeks_absent == 6
    assert results[0].last_present_date == long_ago


def test_custom_ceiling(fixed_now):
    results = compute_absences([student(1, "Never Seen")], [], [], fixed_now, ceiling_weeks=8)

    assert results[0].weeks_absent == 8


def test_presence_only_on_cancelled_dates_counts_as_never_present(fixed_now):
    cancelled = fixed_now.date() - timedelta(days=7)
    results = compute_absences([student(1, "Only Cancelled")], [presence(1, cancelled)], [cancelled], fixed_now)

    assert results[0].weeks_absent == 6
    assert results[0].last_present_date is None


def test_latest_valid_date_wins_over_newer_cancelled_date(fixed_now):
    today = fixed_now.date()
    valid = today - timedelta(days=21)
    cancelled = today - timedelta(days=7)
    results = compute_absences(
        [student(1, "Mixed")],
        [presence(1, valid), presence(1, cancelled), presence(1, today - timedelta(days=35))],
        [cancelled],
        fixed_now,
    )

    assert results[0].last_present_date == valid
    assert results[0].weeks_absent == 3


def test_inactive_students_are_excluded(fixed_now):
    results = compute_absences(
        [student(1, "Active"), student(2, "Graduated", active=False)],
        [],
        [],
        fixed_now,
    )

    assert [r.student.student_id for r in results] == [1]


def test_results_follow_student_order(fixed_now):
    students = [student(3, "C"), student(1, "A"), student(2, "B")]

    assert [r.student.student_id for r in compute_absences(students, [], [], fixed_now)] == [3, 1, 2]


def test_malformed_dates_are_skipped_without_aborting(fixed_now, caplog):
    today = fixed_now.date()
    attendance = [
        PresenceFact(student_id=1, attendance_date="not-a-date"),
        PresenceFact(student_id=1, attendance_date=None),
        presence(1, today - timedelta(days=8)),
        PresenceFact(student_id=2, attendance_date="2026-13-45"),
    ]

    with caplog.at_level("WARNING"):
        results = compute_absences([student(1, "Has Good Row"), student(2, "Only Bad Row")], attendance, [], fixed_now)

    assert _weeks(results) == {1: 1, 2: 6}
    assert "malformed date" in caplog.text


def test_string_and_datetime_dates_are_accepted(fixed_now):
    attendance = [
        PresenceFact(student_id=1, attendance_date="2026-02-20"),
        PresenceFact(student_id=2, attendance_date=datetime(2026, 2, 27, 18, 0)),
    ]

    results = compute_absences([student(1, "Iso"), student(2, "Stamp")], attendance, ["2026-02-27"], fixed_now)

    assert _weeks(results) == {1: 2, 2: 6}


def test_future_presence_counts_as_zero_elapsed_days(fixed_now):
    tomorrow = fixed_now.date() + timedelta(days=1)

    results = compute_absences([student(1, "Early Bird")], [presence(1, tomorrow)], [], fixed_now)

    assert results[0].weeks_absent == 0


def test_weeks_absent_never_decreases_as_time_passes():
    last = date(2026, 1, 2)
    previous = -1
    for offset in range(0, 70):
        weeks = weeks_since(last, last + timedelta(days=offset))
        assert weeks >= previous
        previous = weeks


def test_inputs_are_not_mutated(fixed_now):
    students = [student(1, "Same")]
    attendance = [presence(1, fixed_now.date() - timedelta(days=10))]
    cancelled = [fixed_now.date()]

    compute_absences(students, attendance, cancelled, fixed_now)

    assert students == [student(1, "Same")]
    assert len(attendance) == 1
    assert cancelled == [fixed_now.date()]
