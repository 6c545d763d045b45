"""Public schema exports shared across API route modules."""

from taskboard.schemas.dashboards import (
    DashboardCreate,
    DashboardDetail,
    DashboardRead,
    DashboardUpdate,
)
from taskboard.schemas.errors import ErrorDetail, ErrorResponse
from taskboard.schemas.health import HealthStatusResponse
from taskboard.schemas.tasks import TaskCreate, TaskRead, TaskReorder, TaskUpdate

__all__ = [
    "DashboardCreate",
    "DashboardDetail",
    "DashboardRead",
    "DashboardUpdate",
    "ErrorDetail",
    "ErrorResponse",
    "HealthStatusResponse",
    "TaskCreate",
    "TaskRead",
    "TaskReorder",
    "TaskUpdate",
]
