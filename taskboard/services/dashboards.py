"""Dashboard CRUD and task listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import col

from taskboard.core.logging import get_logger
from taskboard.db import crud
from taskboard.models.dashboards import Dashboard
from taskboard.models.tasks import Task

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskboard.models.tasks import TaskStatus
    from taskboard.schemas.dashboards import DashboardCreate, DashboardUpdate

logger = get_logger(__name__)


async def list_dashboards(session: AsyncSession) -> list[Dashboard]:
    return await Dashboard.objects.all().order_by(col(Dashboard.id).asc()).all(session)


async def list_dashboard_tasks(
    session: AsyncSession,
    *,
    dashboard_id: int,
    task_status: TaskStatus | None = None,
) -> list[Task]:
    """Return a dashboard's tasks in display order, optionally for one column."""
    query = Task.objects.filter_by(dashboard_id=dashboard_id)
    if task_status is not None:
        query = query.filter(col(Task.status) == task_status)
    return await query.order_by(col(Task.position).asc(), col(Task.id).asc()).all(session)


async def create_dashboard(session: AsyncSession, *, payload: DashboardCreate) -> Dashboard:
    dashboard = Dashboard(title=payload.title)
    session.add(dashboard)
    await session.commit()
    await session.refresh(dashboard)
    logger.info("dashboard.created dashboard_id=%s", dashboard.id)
    return dashboard


async def update_dashboard(
    session: AsyncSession,
    *,
    dashboard: Dashboard,
    payload: DashboardUpdate,
) -> Dashboard:
    return await crud.patch(session, dashboard, payload.model_dump(exclude_unset=True))


async def delete_dashboard(session: AsyncSession, *, dashboard: Dashboard) -> int:
    """Delete a dashboard and every task it owns; return the task count removed."""
    removed = await crud.delete_where(
        session,
        Task,
        col(Task.dashboard_id) == dashboard.id,
        commit=False,
    )
    await crud.delete(session, dashboard)
    logger.info("dashboard.deleted dashboard_id=%s tasks_removed=%s", dashboard.id, removed)
    return removed
