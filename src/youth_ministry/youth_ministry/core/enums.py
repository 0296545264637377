from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status stored per (student, date)."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class AlertStatus(str, Enum):
    """Lifecycle of a persisted absence alert: pending -> followed_up."""

    PENDING = "pending"
    FOLLOWED_UP = "followed_up"


class ServiceType(str, Enum):
    FRIDAY = "friday"
    SUNDAY = "sunday"


class AlertSeverity(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"
