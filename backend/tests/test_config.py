"""Settings — session secret must be supplied and strong; URL conversion."""

import jwt
import pytest
from pydantic import ValidationError

from backoffice.config import Settings, async_database_url
from backoffice.infrastructure.identity import decode_session_token

STRONG = "k8Jd0qZ3vX1mN7pR2sT5uW9yB4cE6gH0"


def test_missing_session_secret_fails(monkeypatch):
    monkeypatch.delenv("SESSION_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_short_session_secret_fails():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, session_secret="too-short")


def test_placeholder_session_secret_fails():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, session_secret="change-me-session-secret-0123456789")


def test_token_signed_with_old_default_is_rejected():
    settings = Settings(_env_file=None, session_secret=STRONG)
    forged = jwt.encode(
        {"sub": "x", "userType": "ADMIN", "exp": 4102444800},
        "change-me-session-secret",
    )
    assert decode_session_token(forged, settings.session_secret) is None


def test_strong_secret_accepted():
    assert Settings(_env_file=None, session_secret=STRONG).session_secret == STRONG


def test_async_database_url():
    assert async_database_url("postgresql://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert async_database_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"
