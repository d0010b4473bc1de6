from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .approvals.service import ApprovalService
from .attendance.document_repository import DocumentAttendanceRepository
from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .common.generators import RandomSecretGenerator, SecretGenerator
from .core.constants import (
    DEFAULT_ERROR_DISPLAY_SECONDS,
    DEFAULT_KIOSK_IDLE_SECONDS,
    DEFAULT_LATE_THRESHOLD_MINUTES,
    DEFAULT_MAX_KIOSK_SESSIONS,
    DEFAULT_SUCCESS_DISPLAY_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_document_store import MySQLDocumentStore
from .database.store import DocumentStore, InMemoryDocumentStore
from .employees.directory import EmployeeDirectory
from .employees.document_repository import DocumentEmployeeRepository
from .employees.service import AdminAuthService, EmployeeService
from .kiosk.scheduler import Scheduler, ThreadingScheduler
from .kiosk.service import KioskService
from .notifications.dispatcher import InMemoryNotificationOutbox
from .payments.document_repository import DocumentPaymentRepository
from .payroll.service import PayrollReportService
from .reports.service import ReportService
from .settings.document_repository import DocumentSettingsRepository
from .settings.service import SettingsService


@dataclass(frozen=True)
class Container:
    store: DocumentStore
    conn: Optional[DatabaseConnection]

    employees_repo: DocumentEmployeeRepository
    attendance_repo: DocumentAttendanceRepository
    payments_repo: DocumentPaymentRepository
    settings_repo: DocumentSettingsRepository
    directory: EmployeeDirectory
    notifications: InMemoryNotificationOutbox

    admin_auth: AdminAuthService
    settings_service: SettingsService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    approval_service: ApprovalService
    kiosk_service: KioskService
    payroll_report_service: PayrollReportService
    report_service: ReportService


def build_store(*, backend: str, db_config: Optional[dict] = None) -> tuple[DocumentStore, Optional[DatabaseConnection]]:
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config or {}))
        return MySQLDocumentStore(conn), conn
    if backend == "memory":
        return InMemoryDocumentStore(), None
    raise ValueError(f"Unsupported STORE_BACKEND: {backend!r}")


def build_container(
    *,
    store_backend: str = "memory",
    db_config: Optional[dict] = None,
    admin_password_hash: Optional[str] = None,
    store: Optional[DocumentStore] = None,
    scheduler: Optional[Scheduler] = None,
    generator: Optional[SecretGenerator] = None,
    rng: Optional[random.Random] = None,
    clock: Callable[[], datetime] = now_local,
    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES,
    success_seconds: float = DEFAULT_SUCCESS_DISPLAY_SECONDS,
    error_seconds: float = DEFAULT_ERROR_DISPLAY_SECONDS,
    kiosk_idle_seconds: float = DEFAULT_KIOSK_IDLE_SECONDS,
    max_kiosk_sessions: int = DEFAULT_MAX_KIOSK_SESSIONS,
) -> Container:
    conn: Optional[DatabaseConnection] = None
    if store is None:
        store, conn = build_store(backend=store_backend, db_config=db_config)
    generator = generator or RandomSecretGenerator()
    notifications = InMemoryNotificationOutbox()

    employees_repo = DocumentEmployeeRepository(store)
    attendance_repo = DocumentAttendanceRepository(store)
    payments_repo = DocumentPaymentRepository(store)
    settings_repo = DocumentSettingsRepository(store)
    directory = EmployeeDirectory(store)

    admin_auth = AdminAuthService(employees_repo, admin_password_hash=admin_password_hash)
    settings_service = SettingsService(settings_repo)
    employee_service = EmployeeService(employees_repo, generator=generator, notifier=notifications, clock=clock)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        generator=generator,
        notifier=notifications,
        admin_auth=admin_auth,
        strategy_factory=AttendanceStrategyFactory(threshold_minutes=late_threshold_minutes),
        clock=clock,
    )
    approval_service = ApprovalService(attendance_repo, clock=clock)
    kiosk_service = KioskService(
        settings=settings_service,
        directory=directory,
        employees=employee_service,
        attendance=attendance_service,
        scheduler=scheduler or ThreadingScheduler(),
        generator=generator,
        rng=rng,
        clock=clock,
        success_seconds=success_seconds,
        error_seconds=error_seconds,
        idle_seconds=kiosk_idle_seconds,
        max_sessions=max_kiosk_sessions,
    )
    payroll_report_service = PayrollReportService(employees_repo, payments_repo, settings_service)
    report_service = ReportService(attendance_repo, payments_repo, employees_repo)

    return Container(
        store=store,
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        settings_repo=settings_repo,
        directory=directory,
        notifications=notifications,
        admin_auth=admin_auth,
        settings_service=settings_service,
        employee_service=employee_service,
        attendance_service=attendance_service,
        approval_service=approval_service,
        kiosk_service=kiosk_service,
        payroll_report_service=payroll_report_service,
        report_service=report_service,
    )
