from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .alerts.cache import AlertCache
from .alerts.factory import PresencePolicyFactory
from .alerts.loader import AlertDataLoader
from .alerts.mysql_alert_repository import MySQLAlertRepository
from .alerts.repository import AlertRepository
from .alerts.service import AbsenceAlertService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .cancellations.mysql_cancellation_repository import MySQLCancellationRepository
from .cancellations.repository import CancellationRepository
from .cancellations.service import CancellationService
from .common.events import ChangeNotifier
from .core.constants import DEFAULT_ABSENCE_ALERT_WEEKS, DEFAULT_ABSENCE_CEILING_WEEKS
from .database.connection import ConnectionFactory, DBConfig
from .reports.service import ParentReportService
from .servants.mysql_servant_repository import MySQLAssignmentRepository, MySQLServantRepository
from .servants.repository import AssignmentRepository, ServantRepository
from .servants.service import ServantService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class AlertOptions:
    default_threshold: int = DEFAULT_ABSENCE_ALERT_WEEKS
    ceiling_weeks: int = DEFAULT_ABSENCE_CEILING_WEEKS
    late_counts_as_present: bool = True
    lookback_days: Optional[int] = None
    cache_enabled: bool = True

    @classmethod
    def from_settings(cls, settings) -> "AlertOptions":
        ceiling = int(getattr(settings, "ABSENCE_CEILING_WEEKS", DEFAULT_ABSENCE_CEILING_WEEKS))
        lookback = getattr(settings, "ABSENCE_LOOKBACK_DAYS", None)
        return cls(
            default_threshold=int(getattr(settings, "ABSENCE_ALERT_WEEKS", DEFAULT_ABSENCE_ALERT_WEEKS)),
            ceiling_weeks=ceiling,
            late_counts_as_present=bool(getattr(settings, "LATE_COUNTS_AS_PRESENT", True)),
            lookback_days=int(lookback) if lookback else None,
            cache_enabled=bool(getattr(settings, "ALERT_CACHE_ENABLED", True)),
        )


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    servants_repo: ServantRepository
    assignments_repo: AssignmentRepository
    attendance_repo: AttendanceRepository
    cancellations_repo: CancellationRepository
    settings_repo: SettingsRepository
    alerts_repo: AlertRepository

    notifier: ChangeNotifier
    student_service: StudentService
    servant_service: ServantService
    attendance_service: AttendanceService
    cancellation_service: CancellationService
    settings_service: SettingsService
    alert_service: AbsenceAlertService
    report_service: ParentReportService


def assemble_container(
    *,
    students_repo: StudentRepository,
    servants_repo: ServantRepository,
    assignments_repo: AssignmentRepository,
    attendance_repo: AttendanceRepository,
    cancellations_repo: CancellationRepository,
    settings_repo: SettingsRepository,
    alerts_repo: AlertRepository,
    options: Optional[AlertOptions] = None,
) -> Container:
    options = options or AlertOptions()
    notifier = ChangeNotifier()

    policy = PresencePolicyFactory().for_config(late_counts_as_present=options.late_counts_as_present)
    loader = AlertDataLoader(students_repo, attendance_repo, cancellations_repo, policy=policy)

    settings_service = SettingsService(settings_repo, default_threshold=options.default_threshold, notifier=notifier)
    alert_service = AbsenceAlertService(
        loader,
        settings_service,
        alerts_repo,
        assignments_repo,
        ceiling_weeks=options.ceiling_weeks,
        lookback_days=options.lookback_days,
        cache=AlertCache(enabled=options.cache_enabled),
    )
    # Writes anywhere invalidate the computed alert list wholesale.
    notifier.subscribe(alert_service.invalidate)

    return Container(
        students_repo=students_repo,
        servants_repo=servants_repo,
        assignments_repo=assignments_repo,
        attendance_repo=attendance_repo,
        cancellations_repo=cancellations_repo,
        settings_repo=settings_repo,
        alerts_repo=alerts_repo,
        notifier=notifier,
        student_service=StudentService(students_repo, notifier=notifier),
        servant_service=ServantService(servants_repo, assignments_repo, students_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo, cancellations_repo, notifier=notifier),
        cancellation_service=CancellationService(cancellations_repo, notifier=notifier),
        settings_service=settings_service,
        alert_service=alert_service,
        report_service=ParentReportService(attendance_repo, students_repo, cancellations_repo),
    )


def build_container(*, db_config: dict, options: Optional[AlertOptions] = None) -> Container:
    factory = ConnectionFactory.for_config(DBConfig.from_dict(db_config))

    return assemble_container(
        students_repo=MySQLStudentRepository(factory),
        servants_repo=MySQLServantRepository(factory),
        assignments_repo=MySQLAssignmentRepository(factory),
        attendance_repo=MySQLAttendanceRepository(factory),
        cancellations_repo=MySQLCancellationRepository(factory),
        settings_repo=MySQLSettingsRepository(factory),
        alerts_repo=MySQLAlertRepository(factory),
        options=options,
    )
