"""Reusable FastAPI dependencies for resolving path identifiers.

Path ids arrive as opaque tokens. A malformed or undecodable token is a 400
validation failure reported against ``path.<name>``; a token that decodes to
a key with no row is a 404.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Path, status
from fastapi.exceptions import RequestValidationError

from taskboard.core.opaque_ids import OpaqueIdError, get_id_codec
from taskboard.db.session import get_session
from taskboard.models.dashboards import Dashboard
from taskboard.models.tasks import Task
from taskboard.services.tasks import DASHBOARD_NOT_FOUND, TASK_NOT_FOUND

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

SESSION_DEP = Depends(get_session)
DASHBOARD_ID_PATH = Path(description="Opaque dashboard token.", examples=["jR3kXm9a"])
TASK_ID_PATH = Path(description="Opaque task token.", examples=["jR3kXm9a"])


def resolve_path_id(token: str, *, param: str) -> int:
    """Decode a path token or raise a request validation error for ``param``."""
    try:
        return get_id_codec().decode_id(token)
    except OpaqueIdError as exc:
        raise RequestValidationError(
            [
                {
                    "type": "opaque_id",
                    "loc": ("path", param),
                    "msg": str(exc),
                    "input": token,
                },
            ],
        ) from exc


async def get_dashboard_or_404(
    dashboard_id: str = DASHBOARD_ID_PATH,
    session: AsyncSession = SESSION_DEP,
) -> Dashboard:
    """Load a dashboard by token or raise HTTP 404."""
    key = resolve_path_id(dashboard_id, param="dashboard_id")
    dashboard = await Dashboard.objects.by_id(key).first(session)
    if dashboard is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DASHBOARD_NOT_FOUND)
    return dashboard


async def get_task_or_404(
    task_id: str = TASK_ID_PATH,
    session: AsyncSession = SESSION_DEP,
) -> Task:
    """Load a task by token or raise HTTP 404."""
    key = resolve_path_id(task_id, param="task_id")
    task = await Task.objects.by_id(key).first(session)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return task


DASHBOARD_DEP = Depends(get_dashboard_or_404)
TASK_DEP = Depends(get_task_or_404)
