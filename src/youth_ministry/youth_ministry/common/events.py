from __future__ import annotations

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


class ChangeNotifier:
    """Fan out "data changed" signals to derived-data caches.

    Listeners receive no payload: consumers are expected to drop what they
    cached and recompute from the store, never to patch state incrementally.
    """

    def __init__(self):
        self._listeners: List[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def notify(self) -> None:
        for listener in list(self._listeners):
            listener()
