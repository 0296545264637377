from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

from ...core.enums import AttendanceStatus


class PresencePolicy(ABC):
    """Strategy Pattern: decide which attendance statuses count as "was there"."""

    @abstractmethod
    def counted_statuses(self) -> Tuple[AttendanceStatus, ...]:
        raise NotImplementedError
