"""Request Dependencies — caller identity, capability gate and the signed-URL issuer.

Invariants:
    - require(capability) resolves before get_db in every route signature, so a
      401/403 is decided before a database session exists
    - An invalid, expired or malformed token is treated as no session (401)
    - A resolved Principal is kept on request.state for error logging
    - The issuer is built once per process from settings; tests override
      get_signed_url_issuer
"""

import logging
from functools import lru_cache

from fastapi import Depends, Request

from backoffice.config import Settings, get_settings
from backoffice.core.authorization import (
    Capability, Principal, authorize, principal_from_claims,
)
from backoffice.core.errors import AuthenticationError
from backoffice.core.repository_protocols import SignedUrlIssuer
from backoffice.infrastructure.identity import decode_session_token, extract_token
from backoffice.infrastructure.object_storage import build_signed_url_issuer

logger = logging.getLogger(__name__)


async def get_principal(
    request: Request, settings: Settings = Depends(get_settings),
) -> Principal | None:
    """The caller's Principal, or None when there is no valid session."""
    token = extract_token(
        request.cookies.get(settings.session_cookie_name),
        request.headers.get("authorization"),
    )
    claims = decode_session_token(
        token, settings.session_secret, settings.session_algorithm,
    )
    if claims is None:
        return None
    try:
        principal = principal_from_claims(claims)
    except AuthenticationError as e:
        logger.warning(
            f"Session rejected: {e.message}",
            extra={"path": request.url.path, "error_code": e.code},
        )
        return None
    request.state.principal = principal
    return principal


def require(capability: Capability):
    """Dependency factory: the authenticated Principal holding capability."""

    async def gate(
        request: Request, principal: Principal | None = Depends(get_principal),
    ) -> Principal:
        granted = authorize(principal, capability)
        logger.debug(
            f"Granted {capability.value}",
            extra={
                "path": request.url.path,
                "principal_id": granted.user_id,
                "user_type": granted.user_type.value,
            },
        )
        return granted

    return gate


@lru_cache
def _issuer_from_settings() -> SignedUrlIssuer | None:
    return build_signed_url_issuer(get_settings())


def get_signed_url_issuer() -> SignedUrlIssuer | None:
    return _issuer_from_settings()
