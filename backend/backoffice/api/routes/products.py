"""Product Routes — the catalog, with image keys resolved to loadable URLs."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.api.dependencies import get_signed_url_issuer, require
from backoffice.api.routing import GuardedRoute
from backoffice.config import Settings, get_settings
from backoffice.core.authorization import Capability, Principal
from backoffice.core.repository_protocols import SignedUrlIssuer
from backoffice.infrastructure.database import get_db
from backoffice.schemas.queries import ProductQuery
from backoffice.services.product_catalog import list_catalog

router = APIRouter(
    prefix="/api/v1/products", tags=["products"], route_class=GuardedRoute,
)


@router.get("")
async def list_products_route(
    query: Annotated[ProductQuery, Query()],
    principal: Principal = Depends(require(Capability.VIEW_PRODUCTS)),
    db: AsyncSession = Depends(get_db),
    issuer: SignedUrlIssuer | None = Depends(get_signed_url_issuer),
    settings: Settings = Depends(get_settings),
):
    return await list_catalog(
        db, principal, query, issuer, settings.placeholder_image_path,
    )
