"""Employee Reads — supervisee listing and an employee's own profile with credit.

Invariants:
    - An EMPLOYEE session lists only employees it supervises
    - Credit usage counts open receivables plus unpaid orders not yet billed
      (core/employee_credit.py)
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.authorization import Principal, Resource, ownership_scope
from backoffice.core.domain_types import PaymentStatus
from backoffice.core.employee_credit import CreditSummary, compute_credit
from backoffice.core.errors import ResourceNotFoundError
from backoffice.models.employee import Employee
from backoffice.models.order import Order
from backoffice.models.receivable import Receivable
from backoffice.schemas.queries import EmployeeQuery
from backoffice.services.query_scope import apply_scope

logger = logging.getLogger(__name__)


@dataclass
class EmployeeProfile:
    employee: Employee
    credit: CreditSummary


async def list_employees(
    db: AsyncSession, principal: Principal, query: EmployeeQuery,
) -> list[Employee]:
    scope = ownership_scope(principal, Resource.EMPLOYEE)
    stmt = apply_scope(select(Employee), Employee, scope)
    if query.status is not None:
        stmt = stmt.where(Employee.status == query.status.value)
    if query.department:
        stmt = stmt.where(Employee.department == query.department)
    if query.supervisor_id is not None:
        stmt = stmt.where(Employee.supervisor_id == query.supervisor_id)
    stmt = stmt.order_by(Employee.name, Employee.id)
    stmt = stmt.limit(query.limit).offset(query.offset)
    return list((await db.execute(stmt)).scalars().all())


async def load_profile(
    db: AsyncSession, employee_id: UUID, credit_limit: Decimal, today: date,
) -> EmployeeProfile:
    employee = (await db.execute(
        select(Employee).where(Employee.id == employee_id),
    )).scalar_one_or_none()
    if employee is None:
        raise ResourceNotFoundError("Employee", str(employee_id))

    receivables = (await db.execute(
        select(Receivable).where(Receivable.employee_id == employee_id),
    )).scalars().all()
    unpaid_orders = (await db.execute(
        select(Order).where(
            Order.employee_id == employee_id,
            Order.payment_status == PaymentStatus.UNPAID.value,
        ),
    )).scalars().all()

    credit = compute_credit(credit_limit, receivables, unpaid_orders, today)
    logger.debug(
        f"Credit for employee {employee_id}: used {credit.used_credit}",
        extra={"resource_id": str(employee_id)},
    )
    return EmployeeProfile(employee=employee, credit=credit)
