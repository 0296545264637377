from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_ABSENCE_CEILING_WEEKS
from ..core.enums import AlertStatus
from ..core.exceptions import DataLoadError, InvalidStateError, NotFoundError
from ..servants.repository import AssignmentRepository
from ..settings.service import SettingsService
from .cache import AlertCache
from .loader import AlertDataLoader
from .model import AbsenceAlert, AlertView, GenerationSummary
from .pipeline import compute_alerts
from .repository import AlertRepository

logger = logging.getLogger(__name__)


class AbsenceAlertService:
    """Use case: who needs a follow-up call, and tracking that it happened."""

    def __init__(
        self,
        loader: AlertDataLoader,
        settings: SettingsService,
        alerts: AlertRepository,
        assignments: AssignmentRepository,
        *,
        ceiling_weeks: int = DEFAULT_ABSENCE_CEILING_WEEKS,
        lookback_days: Optional[int] = None,
        cache: Optional[AlertCache] = None,
    ):
        if lookback_days is not None and int(lookback_days) < int(ceiling_weeks) * 7:
            raise ValueError("lookback_days must cover the absence ceiling horizon")

        self._loader = loader
        self._settings = settings
        self._alerts = alerts
        self._assignments = assignments
        self._ceiling_weeks = int(ceiling_weeks)
        self._lookback_days = lookback_days
        self._cache = cache if cache is not None else AlertCache(enabled=False)

    def _since(self, today: date) -> Optional[date]:
        if self._lookback_days is None:
            return None
        return today - timedelta(days=int(self._lookback_days))

    def _compute(self, now: datetime, threshold: int) -> List[AlertView]:
        snapshot = self._loader.load(since=self._since(now.date()))
        views = compute_alerts(
            snapshot.students,
            snapshot.attendance,
            snapshot.cancelled_dates,
            threshold,
            now,
            ceiling_weeks=self._ceiling_weeks,
        )
        logger.debug("computed %s alerts for %s active students", len(views), len(snapshot.students))
        return views

    def current_alerts(self, *, now: Optional[datetime] = None) -> List[AlertView]:
        """Alert list for ``now``; raises DataLoadError if the store is unreadable."""

        now = now or now_local()
        try:
            threshold = self._settings.get_absence_threshold()
        except Exception as e:
            logger.error("failed to read absence threshold: %s", e, exc_info=True)
            raise DataLoadError("could not load alerts", cause=e) from e
        return self._cache.get_or_compute((now.date(), threshold), lambda: self._compute(now, threshold))

    def invalidate(self) -> None:
        self._cache.invalidate()

    def generate_alerts(self, *, now: Optional[datetime] = None) -> GenerationSummary:
        """Persist one alert per (student, assigned servant) in the current list."""

        now = now or now_local()
        upserted = 0
        unassigned: List[int] = []
        for view in self.current_alerts(now=now):
            servant_id = self._assignments.servant_for(view.student_id)
            if servant_id is None:
                unassigned.append(view.student_id)
                continue
            self._alerts.upsert(
                student_id=view.student_id,
                servant_id=servant_id,
                weeks_absent=view.weeks_absent,
                computed_at=now,
            )
            upserted += 1

        if unassigned:
            logger.info("%s alerted students have no servant assigned: %s", len(unassigned), unassigned)
        return GenerationSummary(upserted=upserted, unassigned_student_ids=unassigned)

    def mark_followed_up(self, alert_id: int, *, by_servant_id: int, at: Optional[datetime] = None) -> AbsenceAlert:
        alert = self._alerts.get_by_id(int(alert_id))
        if not alert:
            raise NotFoundError("Alert not found")
        if alert.status == AlertStatus.FOLLOWED_UP:
            raise InvalidStateError("Alert was already followed up")

        if not self._alerts.mark_followed_up(alert_id=int(alert_id), by_servant_id=int(by_servant_id), at=at or now_local()):
            raise InvalidStateError("Alert was already followed up")

        return self._alerts.get_by_id(int(alert_id))

    def list_for_servant(self, servant_id: int, *, status: Optional[AlertStatus] = None) -> Sequence[AbsenceAlert]:
        return self._alerts.list_for_servant(int(servant_id), status=status)
