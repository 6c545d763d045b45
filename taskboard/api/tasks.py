"""Task CRUD endpoints and the drag-and-drop reorder operation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

from taskboard.api.deps import SESSION_DEP, TASK_DEP
from taskboard.schemas.errors import ERROR_RESPONSES
from taskboard.schemas.tasks import TaskCreate, TaskRead, TaskReorder, TaskUpdate
from taskboard.services import tasks as task_service

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskboard.models.tasks import Task

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=TaskRead, responses=ERROR_RESPONSES)
async def create_task(
    payload: TaskCreate,
    session: AsyncSession = SESSION_DEP,
) -> TaskRead:
    """Create a task at the end of its dashboard's status column."""
    task = await task_service.create_task(session, payload=payload)
    return TaskRead.model_validate(task, from_attributes=True)


# Declared before "/{task_id}" so "reorder" is not captured as a task token.
@router.patch("/reorder", response_model=TaskRead, responses=ERROR_RESPONSES)
async def reorder_task(
    payload: TaskReorder,
    session: AsyncSession = SESSION_DEP,
) -> TaskRead:
    """Move a task between two neighbours, optionally changing its status."""
    task = await task_service.reorder_task(session, payload=payload)
    return TaskRead.model_validate(task, from_attributes=True)


@router.get("/{task_id}", response_model=TaskRead, responses=ERROR_RESPONSES)
async def get_task(task: Task = TASK_DEP) -> TaskRead:
    """Get a task by id."""
    return TaskRead.model_validate(task, from_attributes=True)


@router.patch("/{task_id}", response_model=TaskRead, responses=ERROR_RESPONSES)
async def update_task(
    payload: TaskUpdate,
    task: Task = TASK_DEP,
    session: AsyncSession = SESSION_DEP,
) -> TaskRead:
    """Update task fields. Position changes go through the reorder endpoint."""
    task = await task_service.update_task(session, task=task, payload=payload)
    return TaskRead.model_validate(task, from_attributes=True)


@router.delete("/{task_id}", response_model=TaskRead, responses=ERROR_RESPONSES)
async def delete_task(
    task: Task = TASK_DEP,
    session: AsyncSession = SESSION_DEP,
) -> TaskRead:
    """Delete a task, returning the deleted task."""
    deleted = TaskRead.model_validate(task, from_attributes=True)
    await task_service.delete_task(session, task=task)
    return deleted
