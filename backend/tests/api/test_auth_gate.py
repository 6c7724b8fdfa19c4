"""Authorization Gate over HTTP — 401/403 are decided before any persistence call.

Invariants:
    - No session → 401, role without capability → 403
    - A rejected request never opens a DB session or executes a statement
    - Invalid, expired or malformed tokens count as no session
"""

import logging

import jwt
import pytest

from backoffice.config import get_settings

GATED = [
    "/api/v1/customers",
    "/api/v1/orders",
    "/api/v1/products",
    "/api/v1/employees",
    "/api/v1/expenses",
    "/api/v1/expenses/total?month=2026-03",
    "/api/v1/investments/portfolio",
    "/api/v1/files?key=products/a.jpg",
]


@pytest.mark.parametrize("path", GATED)
async def test_no_session_is_401_without_db_access(client, db_spy, path):
    res = await client.get(path)
    assert res.status_code == 401
    assert res.json() == {"error": "Authentication required", "code": "UNAUTHENTICATED"}
    assert db_spy["opened"] == []
    db_spy["session"].execute.assert_not_awaited()


@pytest.mark.parametrize("path,user_type", [
    ("/api/v1/expenses", "SELLER"),
    ("/api/v1/expenses/total?month=2026-03", "CUSTOMER"),
    ("/api/v1/employees", "CUSTOMER"),
    ("/api/v1/orders", "EMPLOYEE"),
    ("/api/v1/investments/portfolio", "SELLER"),
])
async def test_role_without_capability_is_403_without_db_access(
    client, db_spy, auth, path, user_type,
):
    res = await client.get(path, headers=auth(user_type))
    assert res.status_code == 403
    assert res.json()["code"] == "FORBIDDEN"
    assert db_spy["opened"] == []
    db_spy["session"].execute.assert_not_awaited()


async def test_patch_by_non_admin_is_403_without_db_access(client, db_spy, auth):
    res = await client.patch(
        "/api/v1/customers/00000000-0000-0000-0000-000000000001/payment-methods",
        json={"allows_boleto": True, "reason": "approved by finance"},
        headers=auth("SELLER", sellerId="00000000-0000-0000-0000-0000000000aa"),
    )
    assert res.status_code == 403
    assert db_spy["opened"] == []


async def test_expired_token_is_401(client, token):
    expired = token("ADMIN", expires_in=-60)
    res = await client.get(
        "/api/v1/expenses", headers={"Authorization": f"Bearer {expired}"},
    )
    assert res.status_code == 401


async def test_token_signed_with_other_secret_is_401(client):
    forged = jwt.encode(
        {"sub": "x", "userType": "ADMIN", "exp": 4102444800},
        "some-other-secret-that-is-long-enough-000", algorithm="HS256",
    )
    res = await client.get(
        "/api/v1/expenses", headers={"Authorization": f"Bearer {forged}"},
    )
    assert res.status_code == 401


async def test_unknown_user_type_is_401(client, auth):
    res = await client.get("/api/v1/expenses", headers=auth("SUPERUSER"))
    assert res.status_code == 401


async def test_session_cookie_is_accepted(client, token):
    client.cookies.set(get_settings().session_cookie_name, token("ADMIN"))
    try:
        res = await client.get("/api/v1/expenses")
    finally:
        client.cookies.clear()
    assert res.status_code == 200


async def test_seller_without_seller_claim_gets_403(client, auth):
    res = await client.get("/api/v1/orders", headers=auth("SELLER"))
    assert res.status_code == 403


async def test_denied_request_is_logged_with_caller(client, auth, caplog):
    with caplog.at_level(logging.WARNING, logger="backoffice.api.error_handlers"):
        res = await client.get("/api/v1/expenses", headers=auth("SELLER", sub="seller-7"))

    assert res.status_code == 403
    [record] = [r for r in caplog.records if r.name == "backoffice.api.error_handlers"]
    assert record.levelname == "WARNING"
    assert record.path == "/api/v1/expenses"
    assert record.principal_id == "seller-7"
    assert record.user_type == "SELLER"
    assert record.error_category == "authorization"


async def test_missing_session_is_logged_without_caller(client, caplog):
    with caplog.at_level(logging.WARNING, logger="backoffice.api.error_handlers"):
        await client.get("/api/v1/expenses")

    [record] = [r for r in caplog.records if r.name == "backoffice.api.error_handlers"]
    assert record.principal_id is None
    assert record.error_code == "UNAUTHENTICATED"
