"""Session Token Verification — reads the identity provider's signed JWT.

Invariants:
    - Tokens are verified (signature + exp), never just decoded
    - Any verification failure means "no session" (None); the gate decides the status
    - This service never issues tokens
"""

import logging
from typing import Any

import jwt

logger = logging.getLogger(__name__)


def decode_session_token(
    token: str | None, secret: str, algorithm: str = "HS256",
) -> dict[str, Any] | None:
    """Return verified claims, or None when the token is absent or invalid."""
    if not token:
        return None
    try:
        return jwt.decode(
            token, secret, algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Expired session token rejected")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid session token rejected: {e}")
        return None


def extract_token(cookie_value: str | None, authorization: str | None) -> str | None:
    """Cookie first, then an `Authorization: Bearer` header."""
    if cookie_value:
        return cookie_value
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return None
