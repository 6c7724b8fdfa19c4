"""Expense Routes — expense listing and per-type totals for a reporting period."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.api.dependencies import require
from backoffice.api.routing import GuardedRoute
from backoffice.core.authorization import Capability, Principal
from backoffice.core.periods import resolve_period
from backoffice.core.serialize import serialize_records, to_wire
from backoffice.infrastructure.database import get_db
from backoffice.schemas.queries import ExpenseQuery, PeriodQuery
from backoffice.services.expense_report import list_expenses, summarize_period
from backoffice.services.query_scope import pagination

router = APIRouter(
    prefix="/api/v1/expenses", tags=["expenses"], route_class=GuardedRoute,
)


@router.get("")
async def list_expenses_route(
    query: Annotated[ExpenseQuery, Query()],
    principal: Principal = Depends(require(Capability.VIEW_EXPENSES)),
    db: AsyncSession = Depends(get_db),
):
    expenses, total = await list_expenses(db, query)
    return {
        "expenses": serialize_records(expenses),
        "pagination": pagination(query.limit, query.offset, total),
    }


@router.get("/total")
async def expense_total_route(
    query: Annotated[PeriodQuery, Query()],
    principal: Principal = Depends(require(Capability.VIEW_EXPENSES)),
    db: AsyncSession = Depends(get_db),
):
    """Expenses of a day or month grouped by type, by competence date."""
    period = resolve_period(query.date, query.month, required=True)
    summary = await summarize_period(db, period)
    return {
        "period": summary.period,
        "by_type": {
            kind.value: {
                "total": to_wire(bucket.total),
                "count": len(bucket.items),
                "items": serialize_records(bucket.items),
            }
            for kind, bucket in summary.buckets.items()
        },
        "total_expenses": to_wire(summary.total),
    }
