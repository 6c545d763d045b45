"""Integer order keys for tasks inside a status column.

Positions are spaced ``STEP`` apart when appended. Moving a task writes only
that task's row: its new key is the midpoint of its new neighbours, or one
``STEP`` past/half of the single neighbour at a column edge.

Integer midpoints run out: once two neighbours are adjacent
(``next - prev <= 1``) the midpoint truncates to ``prev`` and the moved task
ties with its predecessor. Ties are displayed in ``id`` order. Nothing here
renumbers a column; ``has_gap`` lets callers detect the case.
"""

from __future__ import annotations

STEP = 1024


def append_position(last_position: int | None) -> int:
    """Return the key for a task appended after ``last_position``.

    ``None`` means the column is empty.
    """
    if last_position is None:
        return STEP
    return last_position + STEP


def reorder_position(prev: int | None, next: int | None) -> int:  # noqa: A002
    """Return the key for a task placed between ``prev`` and ``next``."""
    if prev is not None and next is not None:
        return (prev + next) // 2
    if prev is not None:
        return prev + STEP
    if next is not None:
        return next // 2
    return STEP


def has_gap(prev: int | None, next: int | None) -> bool:  # noqa: A002
    """Return whether a distinct midpoint exists between two neighbours."""
    if prev is None or next is None:
        return True
    return next - prev > 1
