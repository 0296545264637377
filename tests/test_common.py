from datetime import date, datetime

import pytest

from youth_ministry.alerts.cache import AlertCache
from youth_ministry.common.datetime_utils import coerce_date, first_name
from youth_ministry.common.events import ChangeNotifier


def test_coerce_date_accepts_stored_shapes():
    assert coerce_date(date(2026, 2, 27)) == date(2026, 2, 27)
    assert coerce_date(datetime(2026, 2, 27, 19, 0)) == date(2026, 2, 27)
    assert coerce_date("2026-02-27 19:00:00") == date(2026, 2, 27)
    with pytest.raises(ValueError):
        coerce_date(20260227)


def test_first_name():
    assert first_name("Amir Hanna") == "Amir"
    assert first_name("Mina") == "Mina"


def test_notifier_calls_every_listener():
    calls = []
    notifier = ChangeNotifier()
    notifier.subscribe(lambda: calls.append(1))
    notifier.subscribe(lambda: calls.append(2))

    notifier.notify()

    assert calls == [1, 2]


def test_alert_cache_computes_once_per_key():
    cache = AlertCache()
    computed = []

    def compute():
        computed.append(1)
        return []

    key = (date(2026, 3, 6), 2)
    cache.get_or_compute(key, compute)
    cache.get_or_compute(key, compute)
    assert len(computed) == 1 and len(cache) == 1

    cache.invalidate()
    cache.get_or_compute(key, compute)
    assert len(computed) == 2


def test_disabled_cache_always_computes():
    cache = AlertCache(enabled=False)
    computed = []

    cache.get_or_compute((date(2026, 3, 6), 2), lambda: computed.append(1) or [])
    cache.get_or_compute((date(2026, 3, 6), 2), lambda: computed.append(1) or [])

    assert len(computed) == 2
    assert len(cache) == 0


def test_alert_cache_skips_store_when_invalidated_mid_compute():
    cache = AlertCache()
    key = (date(2026, 3, 6), 2)

    def stale():
        cache.invalidate()
        return ["stale"]

    assert cache.get_or_compute(key, stale) == ["stale"]
    assert len(cache) == 0
    assert cache.get_or_compute(key, lambda: ["fresh"]) == ["fresh"]
