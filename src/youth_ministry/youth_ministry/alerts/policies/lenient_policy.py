from __future__ import annotations

from typing import Tuple

from ...core.enums import AttendanceStatus
from .base import PresencePolicy


class LenientPresencePolicy(PresencePolicy):
    """Arriving late still counts as attending."""

    def counted_statuses(self) -> Tuple[AttendanceStatus, ...]:
        return (AttendanceStatus.PRESENT, AttendanceStatus.LATE)
