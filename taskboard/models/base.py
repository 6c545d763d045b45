"""Declarative base adding the ``objects`` query manager to table models."""

from typing import ClassVar

from sqlmodel import SQLModel

from taskboard.db.query_manager import ManagerDescriptor


class QueryModel(SQLModel):
    """SQLModel base exposing ``Model.objects`` for chainable queries."""

    objects: ClassVar[ManagerDescriptor] = ManagerDescriptor()
