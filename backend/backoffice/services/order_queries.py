"""Order Queries — scoped order list and detail with line items."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.authorization import Principal, Resource, ownership_scope
from backoffice.core.errors import ResourceNotFoundError
from backoffice.core.periods import resolve_period
from backoffice.models.order import Order
from backoffice.schemas.queries import OrderQuery
from backoffice.services.query_scope import apply_scope, apply_sort, paginate


async def list_orders(
    db: AsyncSession, principal: Principal, query: OrderQuery,
) -> tuple[list[Order], int]:
    scope = ownership_scope(principal, Resource.ORDER)

    stmt = apply_scope(select(Order), Order, scope)
    if query.status is not None:
        stmt = stmt.where(Order.status == query.status.value)
    if query.payment_status is not None:
        stmt = stmt.where(Order.payment_status == query.payment_status.value)
    if query.customer_id is not None:
        stmt = stmt.where(Order.customer_id == query.customer_id)
    period = resolve_period(query.date, query.month)
    if period is not None:
        stmt = stmt.where(
            Order.delivery_date >= period.start_at,
            Order.delivery_date < period.end_at,
        )
    stmt = apply_sort(stmt, Order, query.sort, query.direction)
    return await paginate(db, stmt, query.limit, query.offset)


async def get_order(
    db: AsyncSession, principal: Principal, order_id: UUID,
) -> Order:
    scope = ownership_scope(principal, Resource.ORDER)
    stmt = apply_scope(select(Order).where(Order.id == order_id), Order, scope)
    order = (await db.execute(stmt)).scalar_one_or_none()
    if order is None:
        raise ResourceNotFoundError("Order", str(order_id))
    return order
