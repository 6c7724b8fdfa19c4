"""Employee Credit — how much of the store-credit limit an employee has used.

Invariants:
    - used = open (PENDING/OVERDUE) receivables + UNPAID orders with no receivable
    - available = limit - used, negative when the employee is over the limit
    - An open receivable is overdue once its due date is before today
"""

import datetime as dt
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from backoffice.core.domain_types import PaymentStatus, ReceivableStatus

ZERO = Decimal("0")
_OPEN_RECEIVABLE = {ReceivableStatus.PENDING.value, ReceivableStatus.OVERDUE.value}


@dataclass(frozen=True)
class CreditSummary:
    credit_limit: Decimal
    used_credit: Decimal
    available_credit: Decimal
    pending_receivables: Decimal
    unpaid_orders: Decimal
    open_receivables_count: int
    overdue_receivables_count: int
    used_percentage: int


def used_percentage(used: Decimal, limit: Decimal) -> int:
    """Share of the limit in use, rounded half up to a whole percent."""
    if limit <= ZERO:
        return 0
    return int((used * 100 / limit).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_credit(
    limit: Decimal,
    receivables: Iterable[Any],
    orders: Iterable[Any],
    today: dt.date,
) -> CreditSummary:
    """Open receivables plus unpaid orders not already billed as a receivable."""
    receivables = list(receivables)
    billed_orders = {r.order_id for r in receivables if r.order_id is not None}
    open_receivables = [r for r in receivables if r.status in _OPEN_RECEIVABLE]
    overdue = [
        r for r in open_receivables
        if r.due_date is not None and r.due_date < today
    ]

    pending = sum((r.amount for r in open_receivables), ZERO)
    unpaid = sum(
        (
            o.total for o in orders
            if o.payment_status == PaymentStatus.UNPAID.value
            and o.id not in billed_orders
        ),
        ZERO,
    )
    used = pending + unpaid
    return CreditSummary(
        credit_limit=limit,
        used_credit=used,
        available_credit=limit - used,
        pending_receivables=pending,
        unpaid_orders=unpaid,
        open_receivables_count=len(open_receivables),
        overdue_receivables_count=len(overdue),
        used_percentage=used_percentage(used, limit),
    )
