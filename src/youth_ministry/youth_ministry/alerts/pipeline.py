from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, List

from ..attendance.model import PresenceFact
from ..core.constants import DEFAULT_ABSENCE_CEILING_WEEKS
from ..students.model import Student
from .calculator import compute_absences
from .formatter import build_alert_views
from .model import AlertView


def compute_alerts(
    students: Iterable[Student],
    attendance: Iterable[PresenceFact],
    cancelled_dates: Iterable[Any],
    threshold: int,
    now: date | datetime,
    *,
    ceiling_weeks: int = DEFAULT_ABSENCE_CEILING_WEEKS,
) -> List[AlertView]:
    """Absence calculation followed by threshold filter and formatting.

    Pure: the same inputs and ``now`` always give the same list.
    """

    results = compute_absences(students, attendance, cancelled_dates, now, ceiling_weeks=ceiling_weeks)
    return build_alert_views(results, threshold)
