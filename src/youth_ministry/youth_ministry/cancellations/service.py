from __future__ import annotations

from datetime import date
from typing import List, Optional

from ..common.datetime_utils import coerce_date
from ..common.events import ChangeNotifier
from ..common.validators import optional_str
from ..core.exceptions import NotFoundError, ValidationError
from .model import ClassCancellation
from .repository import CancellationRepository

DEFAULT_REASON = "Cancelled by servant"


class CancellationService:
    def __init__(self, cancellations: CancellationRepository, *, notifier: Optional[ChangeNotifier] = None):
        self._cancellations = cancellations
        self._notifier = notifier or ChangeNotifier()

    def cancel_class(self, cancellation_date: date, *, reason: Optional[str] = None, marked_by: Optional[int] = None) -> int:
        if self._cancellations.get_for_date(cancellation_date):
            raise ValidationError("Class is already cancelled for this date")

        cancellation_id = self._cancellations.create(
            cancellation_date=cancellation_date,
            reason=optional_str(reason) or DEFAULT_REASON,
            marked_by_servant_id=marked_by,
        )
        self._notifier.notify()
        return cancellation_id

    def restore_class(self, cancellation_date: date) -> None:
        if not self._cancellations.delete_for_date(cancellation_date):
            raise NotFoundError("Class is not cancelled for this date")
        self._notifier.notify()

    def is_cancelled(self, cancellation_date: date) -> bool:
        return self._cancellations.get_for_date(cancellation_date) is not None

    def get(self, cancellation_date: date) -> Optional[ClassCancellation]:
        return self._cancellations.get_for_date(cancellation_date)

    def list_cancelled_dates(self) -> List[date]:
        """Cancelled dates, oldest first."""
        return sorted({coerce_date(d) for d in self._cancellations.list_dates()})
