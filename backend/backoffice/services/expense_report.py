"""Expense Report — expense listing and competence-date totals per period."""

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.expense_totals import ExpenseSummary, summarize_expenses
from backoffice.core.periods import Period
from backoffice.models.expense import Expense
from backoffice.schemas.queries import ExpenseQuery
from backoffice.services.query_scope import paginate


async def list_expenses(
    db: AsyncSession, query: ExpenseQuery,
) -> tuple[list[Expense], int]:
    stmt = select(Expense)
    if query.expense_type is not None:
        stmt = stmt.where(Expense.expense_type == query.expense_type.value)
    if query.status is not None:
        stmt = stmt.where(Expense.status == query.status.value)
    if query.date_from is not None:
        stmt = stmt.where(Expense.due_date >= query.date_from)
    if query.date_to is not None:
        stmt = stmt.where(Expense.due_date <= query.date_to)
    stmt = stmt.order_by(Expense.due_date.desc(), Expense.id)
    return await paginate(db, stmt, query.limit, query.offset)


def _within(column, period: Period):
    return and_(column >= period.start, column < period.end)


async def summarize_period(db: AsyncSession, period: Period) -> ExpenseSummary:
    """Totals by expense type for expenses whose competence date is in period.

    The query fetches every expense with any candidate date inside the period;
    the competence-date precedence is applied in core/expense_totals.py.
    """
    stmt = select(Expense).where(or_(
        _within(Expense.competence_date, period),
        _within(Expense.payment_date, period),
        _within(Expense.due_date, period),
    ))
    expenses = (await db.execute(stmt)).scalars().all()
    return summarize_expenses(expenses, period)
