# ruff: noqa: INP001
"""Persistence round-trips for table models and the write helpers."""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel, col
from sqlmodel.ext.asyncio.session import AsyncSession

from taskboard.db import crud
from taskboard.models.dashboards import Dashboard
from taskboard.models.tasks import Task, TaskPriority, TaskStatus


async def _make_engine() -> AsyncEngine:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.connect() as conn, conn.begin():
        await conn.run_sync(SQLModel.metadata.create_all)
    return engine


async def _make_session(engine: AsyncEngine) -> AsyncSession:
    return AsyncSession(engine, expire_on_commit=False)


@pytest.mark.asyncio
async def test_insert_dashboard_and_task_with_naive_utc_timestamps() -> None:
    engine = await _make_engine()
    try:
        async with await _make_session(engine) as session:
            dashboard = Dashboard(title="Release")
            session.add(dashboard)
            await session.commit()
            await session.refresh(dashboard)

            task = Task(
                dashboard_id=dashboard.id,
                title="Tag build",
                priority=TaskPriority.HIGH,
                due_date=datetime(2024, 12, 31, 23, 59, 59),
                position=1024,
            )
            session.add(task)
            await session.commit()
            await session.refresh(task)

        async with await _make_session(engine) as session:
            stored = await Task.objects.by_id(task.id).first(session)

        assert stored is not None
        assert stored.status == TaskStatus.TODO
        assert stored.priority == TaskPriority.HIGH
        assert stored.due_date == datetime(2024, 12, 31, 23, 59, 59)
        for value in (dashboard.created_at, dashboard.updated_at, stored.created_at):
            assert isinstance(value, datetime)
            assert value.tzinfo is None
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_patch_bumps_updated_at_and_keeps_unrelated_fields() -> None:
    engine = await _make_engine()
    try:
        async with await _make_session(engine) as session:
            dashboard = Dashboard(title="Before")
            dashboard.updated_at = datetime(2000, 1, 1)
            session.add(dashboard)
            await session.commit()
            await session.refresh(dashboard)
            created_at = dashboard.created_at

            patched = await crud.patch(session, dashboard, {"title": "After"})

        assert patched.title == "After"
        assert patched.created_at == created_at
        assert patched.updated_at > datetime(2000, 1, 1)
        assert patched.updated_at.tzinfo is None
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_delete_where_reports_removed_rows() -> None:
    engine = await _make_engine()
    try:
        async with await _make_session(engine) as session:
            dashboard = Dashboard(title="Bulk")
            session.add(dashboard)
            await session.commit()
            await session.refresh(dashboard)
            session.add_all(
                [Task(dashboard_id=dashboard.id, title=f"t{i}", position=i) for i in range(3)],
            )
            await session.commit()

            removed = await crud.delete_where(
                session,
                Task,
                col(Task.dashboard_id) == dashboard.id,
            )
            remaining = await Task.objects.all().all(session)

        assert removed == 3
        assert remaining == []
    finally:
        await engine.dispose()
