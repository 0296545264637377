from __future__ import annotations

import threading
from datetime import date
from typing import Callable, Dict, List, Tuple

from .model import AlertView


class AlertCache:
    """Computed alert lists keyed by (calendar day, threshold).

    Results depend on ``now`` only through its date, so a day key is exact.
    Any change to the underlying data drops every entry; entries are never
    patched. A result whose computation overlapped an invalidation is
    returned to its caller but not stored.
    """

    def __init__(self, *, enabled: bool = True):
        self._enabled = enabled
        self._lock = threading.Lock()
        self._entries: Dict[Tuple[date, int], List[AlertView]] = {}
        self._generation = 0

    def get_or_compute(self, key: Tuple[date, int], compute: Callable[[], List[AlertView]]) -> List[AlertView]:
        if not self._enabled:
            return compute()

        with self._lock:
            cached = self._entries.get(key)
            generation = self._generation
        if cached is not None:
            return list(cached)

        value = compute()
        with self._lock:
            if generation == self._generation:
                self._entries[key] = list(value)
        return value

    def invalidate(self) -> None:
        with self._lock:
            self._generation += 1
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
