from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..cancellations.repository import CancellationRepository
from ..core.exceptions import DataLoadError
from ..students.repository import StudentRepository
from .model import AlertSnapshot
from .policies.base import PresencePolicy
from .policies.lenient_policy import LenientPresencePolicy

logger = logging.getLogger(__name__)


class AlertDataLoader:
    """Fetch roster, presence facts and cancelled dates for one computation.

    The fetch is all-or-nothing: if any read fails a DataLoadError is raised
    and no snapshot is produced. An empty roster is a valid snapshot.
    """

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        cancellations: CancellationRepository,
        *,
        policy: Optional[PresencePolicy] = None,
    ):
        self._students = students
        self._attendance = attendance
        self._cancellations = cancellations
        self._policy = policy or LenientPresencePolicy()

    def load(self, *, since: Optional[date] = None) -> AlertSnapshot:
        """``since`` is an optional lower bound on attendance dates.

        Facts older than ``since`` are reduced to each student's latest
        non-cancelled presence, so a bound never changes the computed result.
        """

        try:
            students = tuple(s for s in self._students.list_active() if s.is_active)
            statuses = self._policy.counted_statuses()
            attendance = tuple(self._attendance.list_presence(statuses=statuses, since=since))
            if since is not None:
                attendance += tuple(self._attendance.list_latest_presence(statuses=statuses, before=since))
            cancelled = frozenset(self._cancellations.list_dates())
        except Exception as e:
            logger.error("failed to load alert data: %s", e, exc_info=True)
            raise DataLoadError("could not load alerts", cause=e) from e

        return AlertSnapshot(students=students, attendance=attendance, cancelled_dates=cancelled)
