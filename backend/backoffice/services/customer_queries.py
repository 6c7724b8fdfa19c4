"""Customer Queries — scoped list and detail reads of the customer book."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.authorization import Principal, Resource, ownership_scope
from backoffice.core.domain_types import UserType
from backoffice.core.errors import PermissionDeniedError, ResourceNotFoundError
from backoffice.core.periods import parse_month
from backoffice.models.customer import Customer
from backoffice.schemas.queries import CustomerQuery
from backoffice.services.query_scope import apply_scope, apply_sort, paginate

logger = logging.getLogger(__name__)


async def list_customers(
    db: AsyncSession, principal: Principal, query: CustomerQuery,
) -> tuple[list[Customer], int]:
    """Customers visible to principal. A CUSTOMER session has no book to list."""
    if principal.user_type is UserType.CUSTOMER:
        raise PermissionDeniedError("Customers cannot list the customer book")
    scope = ownership_scope(principal, Resource.CUSTOMER)

    stmt = apply_scope(select(Customer), Customer, scope)
    if query.is_active is not None:
        stmt = stmt.where(Customer.is_active == query.is_active)
    if query.city:
        stmt = stmt.where(Customer.city == query.city)
    if query.payment_terms_days is not None:
        stmt = stmt.where(Customer.payment_terms_days == query.payment_terms_days)
    if query.month:
        period = parse_month(query.month)
        stmt = stmt.where(
            Customer.created_at >= period.start_at,
            Customer.created_at < period.end_at,
        )
    stmt = apply_sort(stmt, Customer, query.sort, query.direction)
    return await paginate(db, stmt, query.limit, query.offset)


async def get_customer(
    db: AsyncSession, principal: Principal, customer_id: UUID,
) -> Customer:
    """One customer, or 404 when absent or outside principal's scope."""
    scope = ownership_scope(principal, Resource.CUSTOMER)
    stmt = apply_scope(
        select(Customer).where(Customer.id == customer_id), Customer, scope,
    )
    customer = (await db.execute(stmt)).scalar_one_or_none()
    if customer is None:
        raise ResourceNotFoundError("Customer", str(customer_id))
    return customer
