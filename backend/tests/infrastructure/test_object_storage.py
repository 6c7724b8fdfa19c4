"""Signed-URL issuer — boto3 presigning, TTL, no caching, error mapping.

Presigning is local computation in botocore, so these tests use real boto3
with static fake credentials and make no network calls.
"""

import time
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlparse

import boto3
import pytest
from botocore.config import Config
from botocore.exceptions import NoCredentialsError

from backoffice.config import Settings
from backoffice.core.errors import StorageError
from backoffice.infrastructure.object_storage import (
    S3SignedUrlIssuer, build_signed_url_issuer,
)


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="AKIAFAKEFAKEFAKE",
        aws_secret_access_key="fake-secret",
        config=Config(signature_version="s3v4"),
    )


def test_presigned_url_targets_bucket_and_key(s3_client):
    issuer = S3SignedUrlIssuer("backoffice-files", "us-east-1", ttl_seconds=900, client=s3_client)
    url = issuer.issue("employees/bruno/2026-03.pdf")

    parsed = urlparse(url)
    query = parse_qs(parsed.query)
    assert "backoffice-files" in parsed.netloc + parsed.path
    assert parsed.path.endswith("/employees/bruno/2026-03.pdf")
    assert query["X-Amz-Expires"] == ["900"]
    assert "X-Amz-Signature" in query


def test_each_call_signs_again(s3_client):
    issuer = S3SignedUrlIssuer("backoffice-files", "us-east-1", client=s3_client)
    first = issuer.issue("a.jpg")
    time.sleep(1.1)
    second = issuer.issue("a.jpg")
    assert first != second


def test_botocore_errors_become_storage_errors():
    client = MagicMock()
    client.generate_presigned_url.side_effect = NoCredentialsError()
    issuer = S3SignedUrlIssuer("bucket", "us-east-1", client=client)
    with pytest.raises(StorageError) as exc:
        issuer.issue("a.jpg")
    assert exc.value.key == "a.jpg"
    assert exc.value.to_response()["error"] == "An unexpected error occurred"


def test_passes_ttl_and_params_to_client():
    client = MagicMock()
    client.generate_presigned_url.return_value = "https://signed"
    S3SignedUrlIssuer("bucket", "us-east-1", ttl_seconds=60, client=client).issue("k")
    client.generate_presigned_url.assert_called_once_with(
        "get_object", Params={"Bucket": "bucket", "Key": "k"}, ExpiresIn=60,
    )


def test_empty_bucket_is_rejected():
    with pytest.raises(ValueError):
        S3SignedUrlIssuer("", "us-east-1", client=MagicMock())


def test_no_bucket_configured_means_no_issuer():
    assert build_signed_url_issuer(Settings(storage_bucket="")) is None


def test_issuer_from_settings():
    issuer = build_signed_url_issuer(Settings(
        storage_bucket="files", storage_region="sa-east-1",
        storage_url_ttl_seconds=120,
    ))
    assert issuer.bucket == "files"
    assert issuer.ttl_seconds == 120
