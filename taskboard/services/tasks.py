"""Task creation, update, and drag-and-drop reordering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, status
from sqlmodel import col, select

from taskboard.core.logging import get_logger
from taskboard.db import crud
from taskboard.models.dashboards import Dashboard
from taskboard.models.tasks import Task, TaskStatus
from taskboard.services.positions import append_position, has_gap, reorder_position

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskboard.schemas.tasks import TaskCreate, TaskReorder, TaskUpdate

TASK_NOT_FOUND = "Task not found"
DASHBOARD_NOT_FOUND = "Dashboard not found"

logger = get_logger(__name__)


async def _require_dashboard(session: AsyncSession, dashboard_id: int) -> None:
    dashboard = await Dashboard.objects.by_id(dashboard_id).first(session)
    if dashboard is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DASHBOARD_NOT_FOUND)


async def last_position_in_column(
    session: AsyncSession,
    *,
    dashboard_id: int,
    task_status: TaskStatus,
) -> int | None:
    """Return the highest position in a (dashboard, status) column, if any."""
    statement = (
        select(col(Task.position))
        .where(col(Task.dashboard_id) == dashboard_id)
        .where(col(Task.status) == task_status)
        .order_by(col(Task.position).desc())
        .limit(1)
    )
    return (await session.exec(statement)).first()


async def position_of(session: AsyncSession, task_id: int | None) -> int | None:
    """Return a task's position, or ``None`` when the id is absent or unknown."""
    if task_id is None:
        return None
    statement = select(col(Task.position)).where(col(Task.id) == task_id)
    return (await session.exec(statement)).first()


async def create_task(session: AsyncSession, *, payload: TaskCreate) -> Task:
    """Create a task at the end of its target column."""
    await _require_dashboard(session, payload.dashboard_id)
    last_position = await last_position_in_column(
        session,
        dashboard_id=payload.dashboard_id,
        task_status=payload.status,
    )
    task = Task(**payload.model_dump(), position=append_position(last_position))
    session.add(task)
    await session.commit()
    await session.refresh(task)
    logger.info(
        "task.created task_id=%s dashboard_id=%s status=%s position=%s",
        task.id,
        task.dashboard_id,
        task.status.value,
        task.position,
    )
    return task


async def update_task(session: AsyncSession, *, task: Task, payload: TaskUpdate) -> Task:
    """Apply a partial update. Never touches ``position``."""
    updates = payload.model_dump(exclude_unset=True)
    if "dashboard_id" in updates and updates["dashboard_id"] != task.dashboard_id:
        await _require_dashboard(session, updates["dashboard_id"])
    return await crud.patch(session, task, updates)


async def delete_task(session: AsyncSession, *, task: Task) -> None:
    """Delete one task."""
    await crud.delete(session, task)
    logger.info("task.deleted task_id=%s dashboard_id=%s", task.id, task.dashboard_id)


async def reorder_task(session: AsyncSession, *, payload: TaskReorder) -> Task:
    """Move a task between two neighbours, optionally into another status column.

    Neighbours that no longer exist are treated as absent. The position and
    the optional status change are written in one commit.
    """
    task = await Task.objects.by_id(payload.task_id).first(session)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)

    prev_position = await position_of(session, payload.prev_id)
    next_position = await position_of(session, payload.next_id)
    if not has_gap(prev_position, next_position):
        logger.warning(
            "task.reorder.degenerate_gap task_id=%s prev_position=%s next_position=%s",
            task.id,
            prev_position,
            next_position,
        )

    updates: dict[str, object] = {"position": reorder_position(prev_position, next_position)}
    if payload.target_status is not None:
        updates["status"] = payload.target_status
    task = await crud.patch(session, task, updates)
    logger.info(
        "task.reordered task_id=%s status=%s position=%s",
        task.id,
        task.status.value,
        task.position,
    )
    return task
