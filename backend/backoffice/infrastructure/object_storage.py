"""Signed-URL Issuer — boto3 presigned GET URLs for objects in the storage bucket.

Invariants:
    - Every issue() call signs a new URL; nothing is cached
    - Does not check that the object exists (callers validate keys first)
    - botocore failures (missing credentials included) mapped to StorageError

Design Decisions:
    - Presigning is local computation in botocore: no network round-trip per call,
      so the sync client is safe to call from async handlers
    - One client per issuer; botocore refreshes expiring credentials itself
"""

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from backoffice.config import Settings
from backoffice.core.errors import StorageError

logger = logging.getLogger(__name__)


class S3SignedUrlIssuer:
    """Issues time-limited GET URLs for keys in one bucket."""

    def __init__(
        self,
        bucket: str,
        region: str,
        ttl_seconds: int = 3600,
        endpoint_url: str | None = None,
        client=None,
    ):
        if not bucket:
            raise ValueError("bucket is required")
        self.bucket = bucket
        self.ttl_seconds = ttl_seconds
        self.client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            config=Config(signature_version="s3v4"),
        )

    def issue(self, key: str) -> str:
        """Sign a GET URL for key valid for ttl_seconds."""
        try:
            url = self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.ttl_seconds,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(
                f"Presign failed: {e}",
                extra={"storage_key": key, "error_code": "STORAGE_ERROR"},
            )
            raise StorageError("Could not sign URL", key)
        logger.debug("Signed URL issued", extra={"storage_key": key})
        return url


def build_signed_url_issuer(settings: Settings) -> S3SignedUrlIssuer | None:
    """Issuer from settings, or None when no bucket is configured."""
    if not settings.storage_bucket:
        return None
    return S3SignedUrlIssuer(
        bucket=settings.storage_bucket,
        region=settings.storage_region,
        ttl_seconds=settings.storage_url_ttl_seconds,
        endpoint_url=settings.storage_endpoint_url,
    )
