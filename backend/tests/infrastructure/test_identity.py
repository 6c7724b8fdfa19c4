"""Session token verification — signature and expiry checked, failures are None."""

from datetime import datetime, timedelta, timezone

import jwt

from backoffice.infrastructure.identity import decode_session_token, extract_token

SECRET = "identity-test-secret-0123456789abcdef"


def _token(secret=SECRET, **overrides):
    claims = {
        "sub": "7", "userType": "ADMIN",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    claims.update(overrides)
    return jwt.encode(claims, secret, algorithm="HS256")


def test_valid_token_returns_claims():
    claims = decode_session_token(_token(), SECRET)
    assert claims["sub"] == "7"
    assert claims["userType"] == "ADMIN"


def test_missing_token_is_none():
    assert decode_session_token(None, SECRET) is None
    assert decode_session_token("", SECRET) is None


def test_expired_token_is_none():
    expired = _token(exp=datetime.now(timezone.utc) - timedelta(minutes=1))
    assert decode_session_token(expired, SECRET) is None


def test_wrong_signature_is_none():
    assert decode_session_token(_token(secret="x" * 40), SECRET) is None


def test_garbage_is_none():
    assert decode_session_token("not.a.jwt", SECRET) is None


def test_token_without_exp_is_none():
    no_exp = jwt.encode({"sub": "7", "userType": "ADMIN"}, SECRET, algorithm="HS256")
    assert decode_session_token(no_exp, SECRET) is None


def test_extract_prefers_cookie():
    assert extract_token("cookie-token", "Bearer header-token") == "cookie-token"


def test_extract_bearer_header():
    assert extract_token(None, "Bearer header-token") == "header-token"
    assert extract_token(None, "bearer header-token") == "header-token"


def test_extract_ignores_other_schemes():
    assert extract_token(None, "Basic dXNlcjpwYXNz") is None
    assert extract_token(None, "Bearer ") is None
    assert extract_token(None, None) is None
