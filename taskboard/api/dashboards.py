"""Dashboard CRUD endpoints and dashboard task listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query

from taskboard.api.deps import DASHBOARD_DEP, SESSION_DEP
from taskboard.models.tasks import TaskStatus
from taskboard.schemas.dashboards import (
    DashboardCreate,
    DashboardDetail,
    DashboardRead,
    DashboardUpdate,
)
from taskboard.schemas.errors import ERROR_RESPONSES
from taskboard.schemas.tasks import TaskRead
from taskboard.services import dashboards as dashboard_service

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskboard.models.dashboards import Dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboards"])
STATUS_QUERY = Query(default=None, alias="status")


@router.get("", response_model=list[DashboardRead])
async def list_dashboards(session: AsyncSession = SESSION_DEP) -> list[DashboardRead]:
    """List all dashboards."""
    dashboards = await dashboard_service.list_dashboards(session)
    return [DashboardRead.model_validate(item, from_attributes=True) for item in dashboards]


@router.post("", response_model=DashboardRead, responses=ERROR_RESPONSES)
async def create_dashboard(
    payload: DashboardCreate,
    session: AsyncSession = SESSION_DEP,
) -> DashboardRead:
    """Create a dashboard."""
    dashboard = await dashboard_service.create_dashboard(session, payload=payload)
    return DashboardRead.model_validate(dashboard, from_attributes=True)


@router.get("/{dashboard_id}", response_model=DashboardDetail, responses=ERROR_RESPONSES)
async def get_dashboard(
    dashboard: Dashboard = DASHBOARD_DEP,
    session: AsyncSession = SESSION_DEP,
) -> DashboardDetail:
    """Return a dashboard with its tasks in display order."""
    tasks = await dashboard_service.list_dashboard_tasks(session, dashboard_id=dashboard.id)
    return DashboardDetail(
        dashboard=DashboardRead.model_validate(dashboard, from_attributes=True),
        tasks=[TaskRead.model_validate(task, from_attributes=True) for task in tasks],
    )


@router.get("/{dashboard_id}/tasks", response_model=list[TaskRead], responses=ERROR_RESPONSES)
async def list_dashboard_tasks(
    dashboard: Dashboard = DASHBOARD_DEP,
    session: AsyncSession = SESSION_DEP,
    task_status: TaskStatus | None = STATUS_QUERY,
) -> list[TaskRead]:
    """List a dashboard's tasks, optionally restricted to one status column."""
    tasks = await dashboard_service.list_dashboard_tasks(
        session,
        dashboard_id=dashboard.id,
        task_status=task_status,
    )
    return [TaskRead.model_validate(task, from_attributes=True) for task in tasks]


@router.patch("/{dashboard_id}", response_model=DashboardRead, responses=ERROR_RESPONSES)
async def update_dashboard(
    payload: DashboardUpdate,
    dashboard: Dashboard = DASHBOARD_DEP,
    session: AsyncSession = SESSION_DEP,
) -> DashboardRead:
    """Rename a dashboard."""
    dashboard = await dashboard_service.update_dashboard(
        session,
        dashboard=dashboard,
        payload=payload,
    )
    return DashboardRead.model_validate(dashboard, from_attributes=True)


@router.delete("/{dashboard_id}", response_model=DashboardRead, responses=ERROR_RESPONSES)
async def delete_dashboard(
    dashboard: Dashboard = DASHBOARD_DEP,
    session: AsyncSession = SESSION_DEP,
) -> DashboardRead:
    """Delete a dashboard and its tasks, returning the deleted dashboard."""
    deleted = DashboardRead.model_validate(dashboard, from_attributes=True)
    await dashboard_service.delete_dashboard(session, dashboard=dashboard)
    return deleted
