"""Schemas for dashboard create/update/read API operations."""

from __future__ import annotations

from datetime import datetime
from typing import Self

from pydantic import model_validator
from sqlmodel import Field, SQLModel

from taskboard.schemas.common import EncodedId
from taskboard.schemas.tasks import TaskRead

_ERR_TITLE_REQUIRED = "title cannot be null"
RUNTIME_ANNOTATION_TYPES = (datetime,)


class DashboardCreate(SQLModel):
    """Payload for creating a dashboard."""

    title: str = Field(min_length=1, max_length=255)


class DashboardUpdate(SQLModel):
    """Payload for partial dashboard updates."""

    title: str | None = Field(default=None, min_length=1, max_length=255)

    @model_validator(mode="after")
    def validate_title(self) -> Self:
        """Reject explicit null titles in patch payloads."""
        if "title" in self.model_fields_set and self.title is None:
            raise ValueError(_ERR_TITLE_REQUIRED)
        return self


class DashboardRead(SQLModel):
    """Dashboard payload returned from read endpoints."""

    id: EncodedId
    title: str
    created_at: datetime
    updated_at: datetime


class DashboardDetail(SQLModel):
    """A dashboard together with all of its tasks in display order."""

    dashboard: DashboardRead
    tasks: list[TaskRead] = Field(default_factory=list)
