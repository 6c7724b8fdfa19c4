"""Customer Routes — customer book reads and the audited payment-method change.

Invariants:
    - SELLER sees its own book, CUSTOMER only itself (detail), ADMIN everything
    - Out-of-scope detail reads are 404, indistinguishable from absent rows
    - PATCH commits the flag change and its audit row together
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.api.dependencies import require
from backoffice.api.routing import GuardedRoute
from backoffice.core.authorization import Capability, Principal
from backoffice.core.serialize import serialize_record, serialize_records
from backoffice.infrastructure.database import get_db
from backoffice.schemas.customer import PaymentMethodUpdate
from backoffice.schemas.queries import CustomerQuery
from backoffice.services.customer_queries import get_customer, list_customers
from backoffice.services.payment_methods import change_payment_methods
from backoffice.services.query_scope import pagination

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/customers", tags=["customers"], route_class=GuardedRoute,
)


@router.get("")
async def list_customers_route(
    query: Annotated[CustomerQuery, Query()],
    principal: Principal = Depends(require(Capability.VIEW_CUSTOMERS)),
    db: AsyncSession = Depends(get_db),
):
    customers, total = await list_customers(db, principal, query)
    return {
        "customers": serialize_records(customers, relationships=("seller",)),
        "pagination": pagination(query.limit, query.offset, total),
    }


@router.get("/{customer_id}")
async def get_customer_route(
    customer_id: UUID,
    principal: Principal = Depends(require(Capability.VIEW_CUSTOMERS)),
    db: AsyncSession = Depends(get_db),
):
    customer = await get_customer(db, principal, customer_id)
    return serialize_record(customer, relationships=("seller",))


@router.patch("/{customer_id}/payment-methods")
async def update_payment_methods_route(
    customer_id: UUID,
    body: PaymentMethodUpdate,
    principal: Principal = Depends(require(Capability.MANAGE_CUSTOMERS)),
    db: AsyncSession = Depends(get_db),
):
    """Change the boleto permission of a customer, with an audit record."""
    customer, audit = await change_payment_methods(db, principal, customer_id, body)
    await db.commit()
    return {
        "customer": serialize_record(customer),
        "audit_id": str(audit.id),
    }
