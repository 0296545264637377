from __future__ import annotations

import logging
from typing import Optional

from ..common.events import ChangeNotifier
from ..common.validators import require_int_range
from ..core.constants import (
    ABSENCE_ALERT_SETTING_KEY,
    DEFAULT_ABSENCE_ALERT_WEEKS,
    MAX_ABSENCE_ALERT_WEEKS,
    MIN_ABSENCE_ALERT_WEEKS,
)
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(
        self,
        settings: SettingsRepository,
        *,
        default_threshold: int = DEFAULT_ABSENCE_ALERT_WEEKS,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self._settings = settings
        self._default_threshold = int(default_threshold)
        self._notifier = notifier or ChangeNotifier()

    @property
    def default_threshold(self) -> int:
        return self._default_threshold

    def get_absence_threshold(self) -> int:
        """Stored threshold, or the default when missing/unusable."""

        raw = self._settings.get(ABSENCE_ALERT_SETTING_KEY)
        if raw is None or not str(raw).strip():
            return self._default_threshold
        try:
            weeks = int(str(raw).strip())
        except ValueError:
            logger.warning("ignoring non-numeric %s setting: %r", ABSENCE_ALERT_SETTING_KEY, raw)
            return self._default_threshold
        if not MIN_ABSENCE_ALERT_WEEKS <= weeks <= MAX_ABSENCE_ALERT_WEEKS:
            logger.warning("ignoring out-of-range %s setting: %r", ABSENCE_ALERT_SETTING_KEY, raw)
            return self._default_threshold
        return weeks

    def set_absence_threshold(self, weeks) -> int:
        weeks = require_int_range(
            weeks,
            "Absence alert weeks",
            minimum=MIN_ABSENCE_ALERT_WEEKS,
            maximum=MAX_ABSENCE_ALERT_WEEKS,
        )
        self._settings.put(ABSENCE_ALERT_SETTING_KEY, str(weeks))
        self._notifier.notify()
        return weeks
