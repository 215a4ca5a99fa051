from __future__ import annotations

from enum import Enum


class PermissionTag(str, Enum):
    """Permission tag carried by a role; drives admin-only operations."""

    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    EMPLOYEE = "empleado"


class EmploymentType(str, Enum):
    STANDARD = "standard"
    PART_TIME = "part_time"


class TemplateKind(str, Enum):
    """How a schedule template takes part in rotation."""

    STANDARD = "standard"
    ROTATION = "rotation"
    PART_TIME = "part_time"
    CUSTOM = "custom"


class AttendanceState(str, Enum):
    PRESENT = "presente"
    ABSENT = "ausente"


class LeaveKind(str, Enum):
    VACATION = "vacation"
    DAY_OFF = "day_off"


class RequestStatus(str, Enum):
    """Approval workflow states for leave requests."""

    PENDING = "pendiente"
    APPROVED = "aprobado"
    REJECTED = "rechazado"
    CANCELLED = "cancelado"


class NotificationLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
