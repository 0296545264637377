from __future__ import annotations

from datetime import date

import pytest

from fakes import FakeCancellations
from youth_ministry.cancellations.service import DEFAULT_REASON, CancellationService
from youth_ministry.common.events import ChangeNotifier
from youth_ministry.core.exceptions import NotFoundError, ValidationError

DAY = date(2026, 3, 13)


def test_cancel_and_restore_notify_listeners():
    calls = []
    notifier = ChangeNotifier()
    notifier.subscribe(lambda: calls.append("changed"))
    service = CancellationService(FakeCancellations(), notifier=notifier)

    service.cancel_class(DAY, reason="Snow day", marked_by=10)
    assert service.is_cancelled(DAY)
    service.restore_class(DAY)

    assert not service.is_cancelled(DAY)
    assert calls == ["changed", "changed"]


def test_second_cancel_for_same_date_is_rejected():
    service = CancellationService(FakeCancellations())
    service.cancel_class(DAY)

    with pytest.raises(ValidationError):
        service.cancel_class(DAY)


def test_blank_reason_uses_default():
    service = CancellationService(FakeCancellations())

    service.cancel_class(DAY, reason="   ")

    assert service.get(DAY).reason == DEFAULT_REASON


def test_restoring_an_open_date_fails():
    with pytest.raises(NotFoundError):
        CancellationService(FakeCancellations()).restore_class(DAY)


def test_list_cancelled_dates_is_sorted():
    service = CancellationService(FakeCancellations([date(2026, 4, 3), date(2026, 1, 2)]))

    assert service.list_cancelled_dates() == [date(2026, 1, 2), date(2026, 4, 3)]
