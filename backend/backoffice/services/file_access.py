"""File Access — decides whether a principal may open a stored object.

Invariants:
    - Runs after validate_storage_key and before any signed-URL issue
    - ADMIN may open any valid key
    - Others may open product images and their own employee documents; anything
      else is reported as not found (existence is not revealed)
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.authorization import Principal, Resource, ownership_scope
from backoffice.core.errors import PermissionDeniedError, ResourceNotFoundError
from backoffice.models.employee import EmployeeDocument
from backoffice.models.product import Product
from backoffice.services.query_scope import apply_scope

logger = logging.getLogger(__name__)


async def check_file_access(db: AsyncSession, principal: Principal, key: str) -> None:
    if principal.is_admin:
        return

    product_image = (await db.execute(
        select(Product.id).where(Product.image_url == key).limit(1),
    )).scalar_one_or_none()
    if product_image is not None:
        return

    try:
        scope = ownership_scope(principal, Resource.DOCUMENT)
    except PermissionDeniedError:
        scope = None
    if scope is not None:
        stmt = apply_scope(
            select(EmployeeDocument.id).where(EmployeeDocument.file_key == key),
            EmployeeDocument, scope,
        )
        if (await db.execute(stmt.limit(1))).scalar_one_or_none() is not None:
            return

    logger.warning(
        "File access denied",
        extra={
            "storage_key": key,
            "principal_id": principal.user_id,
            "user_type": principal.user_type.value,
        },
    )
    raise ResourceNotFoundError("File", key)
