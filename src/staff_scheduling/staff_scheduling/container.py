from __future__ import annotations

from dataclasses import dataclass

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.service import AssignmentLedgerService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_SYSTEM_ADMIN_EMAIL
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.mysql_role_repository import MySQLRoleRepository
from .employees.service import AuthService, EmployeeService, RoleService
from .leave.mysql_leave_repository import MySQLLeaveRequestRepository
from .leave.service import LeaveRequestService
from .notifications.mysql_notification_repository import MySQLNotificationSink
from .rotation.service import RotationService
from .schedules.custom import CustomScheduleBuilder
from .schedules.mysql_schedule_repository import MySQLCustomScheduleRepository, MySQLScheduleTemplateRepository
from .schedules.service import ScheduleCatalogService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    roles_repo: MySQLRoleRepository
    templates_repo: MySQLScheduleTemplateRepository
    assignments_repo: MySQLAssignmentRepository
    attendance_repo: MySQLAttendanceRepository
    leave_repo: MySQLLeaveRequestRepository

    auth_service: AuthService
    employee_service: EmployeeService
    role_service: RoleService
    schedule_service: ScheduleCatalogService
    assignment_service: AssignmentLedgerService
    custom_schedule_builder: CustomScheduleBuilder
    rotation_service: RotationService
    attendance_service: AttendanceService
    leave_service: LeaveRequestService


def build_container(*, db_config: dict, system_admin_email: str = DEFAULT_SYSTEM_ADMIN_EMAIL) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    roles_repo = MySQLRoleRepository(conn)
    templates_repo = MySQLScheduleTemplateRepository(conn)
    custom_repo = MySQLCustomScheduleRepository(conn)
    assignments_repo = MySQLAssignmentRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leave_repo = MySQLLeaveRequestRepository(conn)
    notifier = MySQLNotificationSink(conn)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        roles_repo=roles_repo,
        templates_repo=templates_repo,
        assignments_repo=assignments_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo, roles_repo, system_admin_email=system_admin_email),
        role_service=RoleService(roles_repo, employees_repo),
        schedule_service=ScheduleCatalogService(templates_repo),
        assignment_service=AssignmentLedgerService(assignments_repo, templates_repo, employees_repo),
        custom_schedule_builder=CustomScheduleBuilder(custom_repo, employees_repo),
        rotation_service=RotationService(
            employees_repo, templates_repo, assignments_repo, system_admin_email=system_admin_email
        ),
        attendance_service=AttendanceService(attendance_repo, employees_repo),
        leave_service=LeaveRequestService(leave_repo, notifier),
    )
