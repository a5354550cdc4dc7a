from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Callable, Optional

from .attendance.dashboard import AttendanceDashboardService
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .billing.service import BillingService
from .common.datetime_utils import get_zone, to_local, utc_now
from .database.connection import DatabaseConnection, DBConfig
from .functions.service import FunctionsService
from .functions.storage import ObjectStorage
from .functions.store import FunctionStore, MySQLFunctionStore
from .leave.memory_leave_repository import InMemoryLeaveRepository
from .leave.service import LeaveService
from .notifications.memory_notification_repository import InMemoryNotificationRepository
from .notifications.service import NotificationService, ProvisionalSiteMonitor
from .onboarding.memory_submission_repository import InMemorySubmissionRepository
from .onboarding.service import OnboardingService
from .onboarding.verification import MockVerificationGateway
from .organizations.memory_organization_repository import InMemoryOrganizationRepository
from .organizations.service import OrganizationService
from .permissions.guards import Guards, build_guards
from .permissions.service import RoleService
from .reports.calculator.standard_calculator import StandardPayableDaysCalculator
from .reports.service import AttendanceReportService
from .settings.service import SettingsService
from .store.mock_database import MockDatabase
from .support.memory_ticket_repository import InMemoryTicketRepository
from .support.service import SupportService
from .tasks.memory_task_repository import InMemoryTaskRepository
from .tasks.service import TaskService
from .users.memory_user_repository import InMemoryUserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    db: MockDatabase
    clock: Callable[[], datetime]
    tz: Optional[tzinfo]

    users_repo: InMemoryUserRepository
    organizations_repo: InMemoryOrganizationRepository
    submissions_repo: InMemorySubmissionRepository
    attendance_repo: InMemoryAttendanceRepository
    leave_repo: InMemoryLeaveRepository
    tasks_repo: InMemoryTaskRepository
    notifications_repo: InMemoryNotificationRepository
    tickets_repo: InMemoryTicketRepository

    settings_service: SettingsService
    role_service: RoleService
    user_service: UserService
    auth_service: AuthService
    organization_service: OrganizationService
    onboarding_service: OnboardingService
    leave_service: LeaveService
    attendance_service: AttendanceService
    dashboard_service: AttendanceDashboardService
    report_service: AttendanceReportService
    notification_service: NotificationService
    provisional_site_monitor: ProvisionalSiteMonitor
    task_service: TaskService
    support_service: SupportService
    billing_service: BillingService
    object_storage: ObjectStorage
    functions_service: FunctionsService

    guards: Guards

    def today(self) -> date:
        return to_local(self.clock(), self.tz).date()


def build_container(
    config: dict,
    *,
    db: Optional[MockDatabase] = None,
    clock: Callable[[], datetime] = utc_now,
    verification_rng: Optional[random.Random] = None,
    function_store_factory: Optional[Callable[[], FunctionStore]] = None,
) -> Container:
    """Wire repositories and services from a settings mapping (Flask ``app.config``)."""

    db = db or MockDatabase()
    tz = get_zone(config.get("TIMEZONE"))

    users_repo = InMemoryUserRepository(db)
    organizations_repo = InMemoryOrganizationRepository(db)
    submissions_repo = InMemorySubmissionRepository(db)
    attendance_repo = InMemoryAttendanceRepository(db)
    leave_repo = InMemoryLeaveRepository(db)
    tasks_repo = InMemoryTaskRepository(db)
    notifications_repo = InMemoryNotificationRepository(db)
    tickets_repo = InMemoryTicketRepository(db)

    settings_service = SettingsService(db, settings_file=config.get("SETTINGS_FILE"))
    role_service = RoleService(db)
    user_service = UserService(users_repo)
    auth_service = AuthService(users_repo, user_service, role_service, secret_key=config["SECRET_KEY"])
    organization_service = OrganizationService(organizations_repo)
    onboarding_service = OnboardingService(
        submissions_repo,
        MockVerificationGateway(
            success_rate=float(config.get("VERIFICATION_SUCCESS_RATE", 0.9)),
            uan_success_rate=float(config.get("VERIFICATION_UAN_SUCCESS_RATE", 0.8)),
            rng=verification_rng,
        ),
        settings_service,
        upload_dir=config["UPLOAD_DIR"],
        public_base_url=config.get("PUBLIC_BASE_URL", ""),
    )
    leave_service = LeaveService(leave_repo, users_repo, settings_service, clock=clock)
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        leave_service,
        settings_service,
        tz=tz,
        clock=clock,
    )
    dashboard_service = AttendanceDashboardService(
        attendance_service,
        users_repo,
        organizations_repo,
        submissions_repo,
        leave_service,
        settings_service,
    )
    report_service = AttendanceReportService(
        users_repo,
        attendance_service,
        onboarding_service,
        calculator=StandardPayableDaysCalculator(),
    )
    notification_service = NotificationService(notifications_repo, clock=clock)
    provisional_site_monitor = ProvisionalSiteMonitor(organizations_repo, users_repo, notification_service, settings_service)
    task_service = TaskService(tasks_repo, users_repo, notification_service, clock=clock)
    support_service = SupportService(tickets_repo, users_repo, notification_service, clock=clock)
    billing_service = BillingService(db, organizations_repo)

    object_storage = ObjectStorage(config["STORAGE_DIR"], secret_key=config["SECRET_KEY"])

    def mysql_store() -> FunctionStore:
        return MySQLFunctionStore(DatabaseConnection(DBConfig.from_dict(config.get("DB_CONFIG"))))

    functions_service = FunctionsService(
        function_store_factory or mysql_store,
        object_storage,
        use_mock_email=bool(config.get("USE_MOCK_EMAIL", True)),
        sendgrid_api_key=config.get("SENDGRID_API_KEY"),
        sender=config.get("WELCOME_EMAIL_SENDER", "welcome@example.com"),
        clock=clock,
    )

    return Container(
        db=db,
        clock=clock,
        tz=tz,
        users_repo=users_repo,
        organizations_repo=organizations_repo,
        submissions_repo=submissions_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        tasks_repo=tasks_repo,
        notifications_repo=notifications_repo,
        tickets_repo=tickets_repo,
        settings_service=settings_service,
        role_service=role_service,
        user_service=user_service,
        auth_service=auth_service,
        organization_service=organization_service,
        onboarding_service=onboarding_service,
        leave_service=leave_service,
        attendance_service=attendance_service,
        dashboard_service=dashboard_service,
        report_service=report_service,
        notification_service=notification_service,
        provisional_site_monitor=provisional_site_monitor,
        task_service=task_service,
        support_service=support_service,
        billing_service=billing_service,
        object_storage=object_storage,
        functions_service=functions_service,
        guards=build_guards(auth_service, role_service),
    )
