"""Product Catalog — active products in display order with browser-loadable images.

Invariants:
    - Only ADMIN may include inactive products
    - Order: category rank (core/catalog.py), then case-insensitive name
    - image_url on the wire is always loadable: signed URL, absolute URL or placeholder
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.authorization import Principal
from backoffice.core.catalog import sort_catalog
from backoffice.core.errors import PermissionDeniedError
from backoffice.core.periods import parse_month
from backoffice.core.repository_protocols import SignedUrlIssuer
from backoffice.core.serialize import serialize_record
from backoffice.core.storage_keys import resolve_image_url
from backoffice.models.product import Product
from backoffice.schemas.queries import ProductQuery


async def list_catalog(
    db: AsyncSession,
    principal: Principal,
    query: ProductQuery,
    issuer: SignedUrlIssuer | None,
    placeholder: str,
) -> list[dict]:
    if query.include_inactive and not principal.is_admin:
        raise PermissionDeniedError("Only administrators can list inactive products")

    stmt = select(Product)
    if not query.include_inactive:
        stmt = stmt.where(Product.is_active.is_(True))
    if query.category:
        stmt = stmt.where(func.upper(Product.category) == query.category.upper())
    if query.month:
        period = parse_month(query.month)
        stmt = stmt.where(
            Product.created_at >= period.start_at,
            Product.created_at < period.end_at,
        )
    products = (await db.execute(stmt)).scalars().all()

    catalog = []
    for product in sort_catalog(products):
        row = serialize_record(product)
        row["image_url"] = resolve_image_url(product.image_url, issuer, placeholder)
        catalog.append(row)
    return catalog
