"""Small write helpers shared by services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import delete as sa_delete
from sqlmodel import SQLModel

from taskboard.core.time import utcnow

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlmodel.ext.asyncio.session import AsyncSession

ModelT = TypeVar("ModelT", bound=SQLModel)


async def patch(
    session: AsyncSession,
    obj: ModelT,
    updates: Mapping[str, Any],
    *,
    commit: bool = True,
) -> ModelT:
    """Apply field updates, bump ``updated_at`` when present, and persist."""
    for key, value in updates.items():
        setattr(obj, key, value)
    if hasattr(obj, "updated_at"):
        obj.updated_at = utcnow()  # type: ignore[attr-defined]
    session.add(obj)
    if commit:
        await session.commit()
        await session.refresh(obj)
    return obj


async def delete(session: AsyncSession, obj: SQLModel, *, commit: bool = True) -> None:
    """Delete one row."""
    await session.delete(obj)
    if commit:
        await session.commit()


async def delete_where(
    session: AsyncSession,
    model: type[SQLModel],
    *criteria: Any,
    commit: bool = True,
) -> int:
    """Bulk-delete rows matching ``criteria`` and return the affected count."""
    result = await session.execute(sa_delete(model).where(*criteria))
    if commit:
        await session.commit()
    return int(getattr(result, "rowcount", 0) or 0)
