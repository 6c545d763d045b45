"""Model exports for SQLAlchemy/SQLModel metadata discovery."""

from taskboard.models.dashboards import Dashboard
from taskboard.models.tasks import Task, TaskPriority, TaskStatus

__all__ = [
    "Dashboard",
    "Task",
    "TaskPriority",
    "TaskStatus",
]
