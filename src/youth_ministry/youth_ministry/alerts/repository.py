from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AlertStatus
from .model import AbsenceAlert


class AlertRepository(Protocol):
    def upsert(self, *, student_id: int, servant_id: int, weeks_absent: int, computed_at: datetime) -> int:
        """Create or refresh the alert for (student_id, servant_id).

        Refreshing updates weeks_absent/computed_at and leaves the follow-up
        state untouched. Returns alert_id.
        """

        raise NotImplementedError

    def get_by_id(self, alert_id: int) -> Optional[AbsenceAlert]:
        raise NotImplementedError

    def mark_followed_up(self, *, alert_id: int, by_servant_id: int, at: datetime) -> bool:
        """Transition pending -> followed_up. Returns False if nothing changed."""

        raise NotImplementedError

    def list_for_servant(self, servant_id: int, *, status: Optional[AlertStatus] = None) -> Sequence[AbsenceAlert]:
        raise NotImplementedError
