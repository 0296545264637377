from __future__ import annotations

from datetime import date
from typing import Any, Optional, Protocol, Sequence

from .model import ClassCancellation


class CancellationRepository(Protocol):
    def get_for_date(self, cancellation_date: date) -> Optional[ClassCancellation]:
        raise NotImplementedError

    def create(self, *, cancellation_date: date, reason: Optional[str], marked_by_servant_id: Optional[int]) -> int:
        raise NotImplementedError

    def delete_for_date(self, cancellation_date: date) -> bool:
        raise NotImplementedError

    def list_dates(self) -> Sequence[Any]:
        """Distinct cancelled dates, as stored."""

        raise NotImplementedError
