from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Set

from ..attendance.model import PresenceFact
from ..common.datetime_utils import coerce_date
from ..core.constants import DEFAULT_ABSENCE_CEILING_WEEKS
from ..students.model import Student
from .model import AbsenceResult

logger = logging.getLogger(__name__)


def _as_today(now: date | datetime) -> date:
    return now.date() if isinstance(now, datetime) else now


def _cancelled_set(cancelled_dates: Iterable[Any]) -> Set[date]:
    out: Set[date] = set()
    for value in cancelled_dates:
        try:
            out.add(coerce_date(value))
        except (TypeError, ValueError):
            logger.warning("skipping malformed cancellation date %r", value)
    return out


def _valid_dates_by_student(attendance: Iterable[PresenceFact], cancelled: Set[date]) -> Dict[int, List[date]]:
    by_student: Dict[int, List[date]] = defaultdict(list)
    for fact in attendance:
        try:
            day = coerce_date(fact.attendance_date)
        except (TypeError, ValueError):
            logger.warning(
                "skipping attendance with malformed date %r for student %s",
                fact.attendance_date,
                fact.student_id,
            )
            continue
        if day in cancelled:
            continue
        by_student[fact.student_id].append(day)
    return by_student


def weeks_since(last_present: Optional[date], today: date, *, ceiling_weeks: int = DEFAULT_ABSENCE_CEILING_WEEKS) -> int:
    """Whole weeks elapsed since ``last_present``, capped at ``ceiling_weeks``.

    ``None`` (never present) maps to the ceiling. Presence dated after
    ``today`` counts as zero elapsed days.
    """

    if last_present is None:
        return ceiling_weeks
    elapsed_days = max((today - last_present).days, 0)
    return min(elapsed_days // 7, ceiling_weeks)


def compute_absences(
    students: Iterable[Student],
    attendance: Iterable[PresenceFact],
    cancelled_dates: Iterable[Any],
    now: date | datetime,
    *,
    ceiling_weeks: int = DEFAULT_ABSENCE_CEILING_WEEKS,
) -> List[AbsenceResult]:
    """Per active student: weeks since the last valid presence.

    Presence on a cancelled date is discounted, so a student seen only on
    cancelled dates is treated exactly like one never seen. Results follow
    the order of ``students``. Inputs are not mutated.
    """

    today = _as_today(now)
    cancelled = _cancelled_set(cancelled_dates)
    valid_dates = _valid_dates_by_student(attendance, cancelled)

    results: List[AbsenceResult] = []
    for student in students:
        if not student.is_active:
            continue
        dates = valid_dates.get(student.student_id)
        last_present = max(dates) if dates else None
        results.append(
            AbsenceResult(
                student=student,
                weeks_absent=weeks_since(last_present, today, ceiling_weeks=ceiling_weeks),
                last_present_date=last_present,
            )
        )
    return results
