from __future__ import annotations

from typing import Iterable, List

from ..common.datetime_utils import first_name
from ..core.constants import DEFAULT_ABSENCE_ALERT_WEEKS, HIGH_SEVERITY_WEEKS
from ..core.enums import AlertSeverity
from .model import AbsenceResult, AlertView


def suggested_message(name: str, weeks_absent: int) -> str:
    weeks = f"{weeks_absent} week" if weeks_absent == 1 else f"{weeks_absent} weeks"
    return (
        f"Hi {name}, we've missed you at youth group for the past {weeks}! "
        "Everything okay? We'd love to see you this week. Let me know if you need anything!"
    )


def severity_for(weeks_absent: int) -> AlertSeverity:
    return AlertSeverity.HIGH if weeks_absent >= HIGH_SEVERITY_WEEKS else AlertSeverity.MEDIUM


def build_alert_views(results: Iterable[AbsenceResult], threshold: int = DEFAULT_ABSENCE_ALERT_WEEKS) -> List[AlertView]:
    """Keep results at or above ``threshold``, most weeks first.

    The sort is stable: ties keep the order the results arrived in.
    """

    included = [r for r in results if r.weeks_absent >= threshold]
    included.sort(key=lambda r: r.weeks_absent, reverse=True)

    views: List[AlertView] = []
    for r in included:
        given = first_name(r.student.name)
        views.append(
            AlertView(
                student_id=r.student.student_id,
                name=r.student.name,
                grade=r.student.grade,
                weeks_absent=r.weeks_absent,
                last_present_date=r.last_present_date,
                first_name=given,
                suggested_message=suggested_message(given, r.weeks_absent),
                severity=severity_for(r.weeks_absent),
            )
        )
    return views
