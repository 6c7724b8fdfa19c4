"""Investment Routes — an investor's share portfolio."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.api.dependencies import require
from backoffice.api.routing import GuardedRoute
from backoffice.core.authorization import (
    Capability, Principal, Resource, ownership_scope,
)
from backoffice.core.errors import PermissionDeniedError, ValidationError
from backoffice.core.portfolio import SHARE_FIELDS
from backoffice.core.serialize import to_wire
from backoffice.infrastructure.database import get_db
from backoffice.schemas.queries import PortfolioQuery
from backoffice.services.investment_portfolio import load_positions

router = APIRouter(
    prefix="/api/v1/investments", tags=["investments"], route_class=GuardedRoute,
)

_EXACT_KEYS = SHARE_FIELDS + ("current_price", "avg_price")


@router.get("/portfolio")
async def portfolio_route(
    query: Annotated[PortfolioQuery, Query()],
    principal: Principal = Depends(require(Capability.VIEW_PORTFOLIO)),
    db: AsyncSession = Depends(get_db),
):
    """Per-company breakdown of purchased, gifted, vested and sellable shares."""
    if principal.is_admin:
        if query.customer_id is None:
            raise ValidationError(
                "Query parameter 'customer_id' is required", field="customer_id",
            )
        customer_id = query.customer_id
    else:
        customer_id = ownership_scope(principal, Resource.PORTFOLIO)["customer_id"]
        if query.customer_id is not None and query.customer_id != customer_id:
            raise PermissionDeniedError("Cannot read another investor's portfolio")

    today = datetime.now(timezone.utc).date()
    positions = await load_positions(db, customer_id, today)
    return to_wire([p.to_dict() for p in positions], exact_keys=_EXACT_KEYS)
