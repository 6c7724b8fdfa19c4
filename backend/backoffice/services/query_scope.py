"""Query Scoping — ownership filters, whitelisted sorting and paging for list queries.

Invariants:
    - Scope filters come only from core/authorization.ownership_scope
    - Sort columns arrive as Literal-validated names (schemas/queries.py)
    - A primary-key tie-breaker keeps paging stable across equal sort values
"""

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


def apply_scope(stmt: Select, model: Any, scope: dict[str, Any]) -> Select:
    for column, value in scope.items():
        stmt = stmt.where(getattr(model, column) == value)
    return stmt


def apply_sort(stmt: Select, model: Any, sort: str, direction: str) -> Select:
    column = getattr(model, sort)
    ordered = column.desc() if direction == "desc" else column.asc()
    return stmt.order_by(ordered, model.id)


async def paginate(
    db: AsyncSession, stmt: Select, limit: int, offset: int,
) -> tuple[list[Any], int]:
    """Run stmt for one page; returns (rows, total rows matching the filters)."""
    count_stmt = select(func.count()).select_from(
        stmt.order_by(None).subquery(),
    )
    total = (await db.execute(count_stmt)).scalar_one()
    result = await db.execute(stmt.limit(limit).offset(offset))
    return list(result.scalars().all()), total


def pagination(limit: int, offset: int, total: int) -> dict[str, int]:
    return {"limit": limit, "offset": offset, "total": total}
