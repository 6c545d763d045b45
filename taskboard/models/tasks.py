"""Task model with its status column and ordering key."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field

from taskboard.core.time import utcnow
from taskboard.models.base import QueryModel

RUNTIME_ANNOTATION_TYPES = (datetime,)


class TaskStatus(str, Enum):
    """Board columns a task can sit in."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, Enum):
    """Optional urgency label."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Task(QueryModel, table=True):
    """Dashboard-scoped task ordered by ``position`` within its status column.

    ``position`` is not unique; ties are broken by ``id`` when listing.
    """

    __tablename__ = "tasks"  # pyright: ignore[reportAssignmentType]

    id: int | None = Field(default=None, primary_key=True)
    dashboard_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("dashboards.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )

    title: str = Field(max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    status: TaskStatus = Field(default=TaskStatus.TODO, index=True)
    priority: TaskPriority | None = Field(default=None)
    due_date: datetime | None = None
    position: int = Field(default=0, index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
