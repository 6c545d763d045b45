"""Schemas for task create/update/reorder/read API operations."""

from __future__ import annotations

from datetime import datetime
from typing import Self

from pydantic import model_validator
from sqlmodel import Field, SQLModel

from taskboard.models.tasks import TaskPriority, TaskStatus
from taskboard.schemas.common import EncodedId, IdToken, IsoDatetime

_NON_NULLABLE_UPDATE_FIELDS = ("title", "status", "dashboard_id")
RUNTIME_ANNOTATION_TYPES = (datetime,)


class TaskCreate(SQLModel):
    """Payload for creating a task at the end of its status column."""

    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    priority: TaskPriority | None = None
    due_date: IsoDatetime | None = None
    dashboard_id: IdToken
    status: TaskStatus = TaskStatus.TODO


class TaskUpdate(SQLModel):
    """Payload for partial task updates. Ordering is changed only via reorder."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    priority: TaskPriority | None = None
    due_date: IsoDatetime | None = None
    dashboard_id: IdToken | None = None
    status: TaskStatus | None = None

    @model_validator(mode="after")
    def validate_required_fields(self) -> Self:
        """Reject explicit nulls for fields that cannot be cleared."""
        for name in _NON_NULLABLE_UPDATE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                msg = f"{name} cannot be null"
                raise ValueError(msg)
        return self


class TaskReorder(SQLModel):
    """Move a task between two neighbours, optionally into another column.

    ``prev_id`` and ``next_id`` name the tasks that will sit immediately
    before and after the moved task; either may be omitted at a column edge.
    """

    task_id: IdToken
    prev_id: IdToken | None = None
    next_id: IdToken | None = None
    target_status: TaskStatus | None = None


class TaskRead(SQLModel):
    """Task payload returned from read endpoints."""

    id: EncodedId
    dashboard_id: EncodedId
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    position: int
    created_at: datetime
    updated_at: datetime
