"""Order Routes — scoped order list and detail."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.api.dependencies import require
from backoffice.api.routing import GuardedRoute
from backoffice.core.authorization import Capability, Principal
from backoffice.core.serialize import serialize_record, serialize_records
from backoffice.infrastructure.database import get_db
from backoffice.schemas.queries import OrderQuery
from backoffice.services.order_queries import get_order, list_orders
from backoffice.services.query_scope import pagination

router = APIRouter(
    prefix="/api/v1/orders", tags=["orders"], route_class=GuardedRoute,
)


@router.get("")
async def list_orders_route(
    query: Annotated[OrderQuery, Query()],
    principal: Principal = Depends(require(Capability.VIEW_ORDERS)),
    db: AsyncSession = Depends(get_db),
):
    orders, total = await list_orders(db, principal, query)
    return {
        "orders": serialize_records(orders),
        "pagination": pagination(query.limit, query.offset, total),
    }


@router.get("/{order_id}")
async def get_order_route(
    order_id: UUID,
    principal: Principal = Depends(require(Capability.VIEW_ORDERS)),
    db: AsyncSession = Depends(get_db),
):
    order = await get_order(db, principal, order_id)
    return serialize_record(order, relationships=("items.product",))
