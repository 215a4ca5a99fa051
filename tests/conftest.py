from __future__ import annotations

from datetime import datetime

import pytest

from src.staff_scheduling.staff_scheduling.common.permissions import Identity
from src.staff_scheduling.staff_scheduling.core.enums import PermissionTag


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 3, 8, 0, 0)


@pytest.fixture
def admin() -> Identity:
    return Identity(employee_id=1, role="Administrador", permission_tag=PermissionTag.ADMIN, full_name="Admin Sistema")


@pytest.fixture
def staff() -> Identity:
    return Identity(employee_id=2, role="Centralista", permission_tag=PermissionTag.EMPLOYEE, full_name="Ana Pérez")
