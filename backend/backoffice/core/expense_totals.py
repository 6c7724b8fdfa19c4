"""Expense Totals — competence-date bucketing of expenses by type.

Invariants:
    - Competence date precedence: competence_date, then payment_date when PAID,
      then due_date; an expense with none of these belongs to no period
    - Each line counts amount + fee_amount (fee may be None)
    - All arithmetic in Decimal; every ExpenseType appears in the result, even at zero
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from backoffice.core.domain_types import ExpenseStatus, ExpenseType
from backoffice.core.periods import Period

ZERO = Decimal("0")


def competence_date(expense: Any) -> date | None:
    if expense.competence_date is not None:
        return expense.competence_date
    if expense.status == ExpenseStatus.PAID.value and expense.payment_date is not None:
        return expense.payment_date
    return expense.due_date


def line_total(expense: Any) -> Decimal:
    return (expense.amount or ZERO) + (expense.fee_amount or ZERO)


@dataclass
class ExpenseBucket:
    items: list[Any] = field(default_factory=list)
    total: Decimal = ZERO


@dataclass
class ExpenseSummary:
    period: str
    buckets: dict[ExpenseType, ExpenseBucket]

    @property
    def total(self) -> Decimal:
        return sum((b.total for b in self.buckets.values()), ZERO)


def summarize_expenses(expenses: Iterable[Any], period: Period) -> ExpenseSummary:
    """Group expenses whose competence date falls inside period."""
    buckets = {t: ExpenseBucket() for t in ExpenseType}
    for expense in expenses:
        if not period.contains(competence_date(expense)):
            continue
        try:
            kind = ExpenseType(expense.expense_type)
        except ValueError:
            # Legacy rows with retired types stay out of every bucket
            continue
        bucket = buckets[kind]
        bucket.items.append(expense)
        bucket.total += line_total(expense)
    return ExpenseSummary(period=period.label, buckets=buckets)
