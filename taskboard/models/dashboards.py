"""Dashboard model grouping tasks into status columns."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field

from taskboard.core.time import utcnow
from taskboard.models.base import QueryModel

RUNTIME_ANNOTATION_TYPES = (datetime,)


class Dashboard(QueryModel, table=True):
    """Top-level board owning an ordered set of tasks."""

    __tablename__ = "dashboards"  # pyright: ignore[reportAssignmentType]

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
