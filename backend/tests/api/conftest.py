"""API test fixtures — async DB, FastAPI test client, session tokens, fake issuer.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - get_signed_url_issuer overridden with a recording fake (no boto3)
    - Tokens are signed with the configured session secret, like the identity provider

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so the test session
      sees what the app session commits
    - db_manager patched: the readiness probe uses db_manager directly
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import backoffice.infrastructure.database as db_module
from backoffice.api.dependencies import get_signed_url_issuer
from backoffice.config import get_settings
from backoffice.db.base import Base
from backoffice.infrastructure.database import get_db, DatabaseSessionManager
from backoffice.main import app
import backoffice.models  # noqa: F401  (registers every table on Base.metadata)


class FakeIssuer:
    """Records keys and returns a distinct URL per call."""

    def __init__(self):
        self.calls: list[str] = []

    def issue(self, key: str) -> str:
        self.calls.append(key)
        return f"https://storage.test/{key}?X-Amz-Signature={uuid4().hex}"


def make_token(user_type: str, expires_in: int = 3600, **claims) -> str:
    """Session JWT as the identity provider would issue it."""
    settings = get_settings()
    payload = {
        "sub": claims.pop("sub", f"user-{uuid4().hex[:8]}"),
        "userType": user_type,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    payload.update({k: str(v) for k, v in claims.items() if v is not None})
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def bearer(user_type: str, **claims) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_type, **claims)}"}


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def issuer():
    return FakeIssuer()


@pytest.fixture
async def client(test_engine, test_session_factory, issuer):
    """FastAPI test client with DB and storage dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_signed_url_issuer] = lambda: issuer

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def admin_headers():
    return bearer("ADMIN")


@pytest.fixture
def auth():
    """auth(user_type, **claims) → Authorization header dict."""
    return bearer


@pytest.fixture
def token():
    """token(user_type, expires_in=3600, **claims) → raw session JWT."""
    return make_token


@pytest.fixture
def db_spy(client):
    """Replace get_db with a spy session; records whether it was ever opened."""
    spy = MagicMock(spec=AsyncSession)
    spy.execute = AsyncMock()
    opened = []

    async def spy_get_db():
        opened.append(True)
        yield spy

    app.dependency_overrides[get_db] = spy_get_db
    return {"session": spy, "opened": opened}
