"""Alert defaults and bounds shared by services and configuration."""

DEFAULT_ABSENCE_ALERT_WEEKS = 2
DEFAULT_ABSENCE_CEILING_WEEKS = 6
DEFAULT_HISTORY_LIMIT = 30

MIN_ABSENCE_ALERT_WEEKS = 1
MAX_ABSENCE_ALERT_WEEKS = 6

HIGH_SEVERITY_WEEKS = 4

ABSENCE_ALERT_SETTING_KEY = "absence_alert_weeks"
