from __future__ import annotations

from datetime import timedelta

from fakes import presence, student
from youth_ministry.alerts.pipeline import compute_alerts


def test_student_absent_twenty_days_is_alerted_at_two_weeks(fixed_now):
    last = fixed_now.date() - timedelta(days=20)

    views = compute_alerts([student(1, "Amir Hanna")], [presence(1, last)], [], 2, fixed_now)

    assert len(views) == 1
    assert views[0].weeks_absent == 2
    assert views[0].last_present_date == last
    assert views[0].first_name == "Amir"


def test_presence_on_cancelled_date_is_ignored(fixed_now):
    cancelled = fixed_now.date() - timedelta(days=20)

    views = compute_alerts([student(1, "Amir Hanna")], [presence(1, cancelled)], [cancelled], 2, fixed_now)

    assert views[0].weeks_absent == 6
    assert views[0].last_present_date is None


def test_higher_absence_listed_first(fixed_now):
    today = fixed_now.date()
    students = [student(1, "Three Weeks"), student(2, "Five Weeks")]
    attendance = [presence(1, today - timedelta(days=21)), presence(2, today - timedelta(days=35))]

    views = compute_alerts(students, attendance, [], 2, fixed_now)

    assert [(v.student_id, v.weeks_absent) for v in views] == [(2, 5), (1, 3)]


def test_recent_attendees_are_not_alerted(fixed_now):
    views = compute_alerts([student(1, "Regular")], [presence(1, fixed_now.date() - timedelta(days=6))], [], 1, fixed_now)

    assert views == []


def test_empty_roster_yields_no_alerts(fixed_now):
    assert compute_alerts([], [], [], 2, fixed_now) == []


def test_repeated_calls_give_identical_results(fixed_now):
    today = fixed_now.date()
    students = [student(1, "A"), student(2, "B"), student(3, "C")]
    attendance = [presence(1, today - timedelta(days=15)), presence(2, today - timedelta(days=40))]
    cancelled = [today - timedelta(days=7)]

    first = compute_alerts(students, attendance, cancelled, 2, fixed_now)
    second = compute_alerts(students, attendance, cancelled, 2, fixed_now)

    assert first == second
