"""Storage Keys — validation of object-storage keys and image reference resolution.

Invariants:
    - validate_storage_key runs BEFORE any signed-URL issuer call
    - A valid key is relative, inside the configured folder prefix, with no
      traversal segments, backslashes or control characters
    - resolve_image_url never raises: storage failures degrade to the placeholder
"""

import logging

from backoffice.core.errors import BackofficeError, ValidationError
from backoffice.core.repository_protocols import SignedUrlIssuer

logger = logging.getLogger(__name__)

MAX_KEY_LENGTH = 1024
_EXTERNAL_PREFIXES = ("http://", "https://", "data:")


def validate_storage_key(key: str | None, folder_prefix: str = "") -> str:
    """Return the key unchanged if it may be handed to the issuer."""
    if key is None or not key.strip():
        raise ValidationError("Query parameter 'key' is required", field="key")
    if len(key) > MAX_KEY_LENGTH:
        raise ValidationError("Storage key is too long", field="key")
    lowered = key.lower()
    if is_external_url(lowered):
        raise ValidationError("Storage key must not be a URL", field="key")
    if key.startswith("/") or "\\" in key:
        raise ValidationError("Storage key must be a relative path", field="key")
    if any(part in ("..", ".") for part in key.split("/")):
        raise ValidationError("Storage key must not contain dot segments", field="key")
    if any(ord(ch) < 32 or ord(ch) == 127 for ch in key):
        raise ValidationError("Storage key contains control characters", field="key")
    if folder_prefix and not key.startswith(folder_prefix):
        raise ValidationError("Storage key is outside the configured folder", field="key")
    return key


def is_external_url(raw: str) -> bool:
    return raw.startswith(_EXTERNAL_PREFIXES)


def is_storage_key(raw: str | None) -> bool:
    """True for a bucket key, false for blanks, local paths and external URLs."""
    if not raw or not raw.strip():
        return False
    return not raw.startswith("/") and not is_external_url(raw)


def resolve_image_url(
    raw: str | None, issuer: SignedUrlIssuer | None, placeholder: str,
) -> str:
    """Map a stored image reference to something a browser can load."""
    if raw and is_external_url(raw):
        return raw
    if not is_storage_key(raw) or issuer is None:
        return placeholder
    try:
        return issuer.issue(raw)
    except BackofficeError as e:
        logger.warning(
            f"Image URL signing failed, using placeholder: {e.message}",
            extra={"storage_key": raw, "error_code": e.code},
        )
        return placeholder
