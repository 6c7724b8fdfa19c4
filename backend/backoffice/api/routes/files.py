"""File Routes — 302 redirect to a freshly signed object-storage URL.

Invariants:
    - The key is validated before any database or storage call
    - Each request signs a new URL; the redirect is marked no-store
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.api.dependencies import get_signed_url_issuer, require
from backoffice.api.routing import GuardedRoute
from backoffice.config import Settings, get_settings
from backoffice.core.authorization import Capability, Principal
from backoffice.core.errors import StorageError
from backoffice.core.repository_protocols import SignedUrlIssuer
from backoffice.core.storage_keys import validate_storage_key
from backoffice.infrastructure.database import get_db
from backoffice.services.file_access import check_file_access
from backoffice.schemas.queries import FileQuery

router = APIRouter(
    prefix="/api/v1/files", tags=["files"], route_class=GuardedRoute,
)


@router.get("")
async def open_file_route(
    query: Annotated[FileQuery, Query()],
    principal: Principal = Depends(require(Capability.VIEW_FILES)),
    db: AsyncSession = Depends(get_db),
    issuer: SignedUrlIssuer | None = Depends(get_signed_url_issuer),
    settings: Settings = Depends(get_settings),
):
    key = validate_storage_key(query.key, settings.storage_folder_prefix)
    if issuer is None:
        raise StorageError("Object storage is not configured", key)
    await check_file_access(db, principal, key)
    return RedirectResponse(
        issuer.issue(key),
        status_code=status.HTTP_302_FOUND,
        headers={"Cache-Control": "no-store"},
    )
