from __future__ import annotations

from typing import Tuple

from ...core.enums import AttendanceStatus
from .base import PresencePolicy


class StrictPresencePolicy(PresencePolicy):
    """Only an explicit "present" counts."""

    def counted_statuses(self) -> Tuple[AttendanceStatus, ...]:
        return (AttendanceStatus.PRESENT,)
