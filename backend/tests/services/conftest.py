"""Service test fixtures — async DB, view cache, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_view_cache dependencies overridden for route tests
    - auth_client carries a valid session cookie; client carries none

Design Decisions:
    - SQLite in-memory: fast, no external dependency; CHECK constraints still
      enforced, so persistence-failure paths are exercised for real
    - StaticPool: every session shares the one in-memory connection
"""

import uuid
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from app.config import get_settings
from app.core.domain_types import AuthenticatedUser
from app.db.base import Base
from app.infrastructure.database import get_db
from app.infrastructure.identity_provider import PasswordHasher
from app.infrastructure.session_tokens import issue_session_token
from app.infrastructure.view_cache import ViewCache, get_view_cache
from app.models.invoice import Invoice
from app.models.user import User
from app.main import app

USER_EMAIL = "user@nextmail.com"
USER_PASSWORD = "123456"


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
def view_cache():
    return ViewCache()


@pytest.fixture
async def client(test_session_factory, view_cache):
    """FastAPI test client with DB and view cache dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_view_cache] = lambda: view_cache

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def session_token():
    settings = get_settings()
    user = AuthenticatedUser(
        id=str(uuid.uuid4()), email=USER_EMAIL, name="User",
    )
    return issue_session_token(
        user, settings.auth_secret, settings.session_max_age_seconds,
    )


@pytest.fixture
async def auth_client(client, session_token):
    """Client carrying a valid session cookie."""
    client.cookies.set(get_settings().session_cookie_name, session_token)
    return client


@pytest.fixture
async def seed_user(test_db):
    """User with a low-cost bcrypt hash of USER_PASSWORD."""
    user = User(
        name="User", email=USER_EMAIL,
        password=PasswordHasher(rounds=4).hash(USER_PASSWORD),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
async def seed_invoice(test_db):
    """A pending invoice dated 2024-01-15."""
    invoice = Invoice(
        customer_id="cust-1", amount=15795, status="pending",
        date=date(2024, 1, 15),
    )
    test_db.add(invoice)
    await test_db.commit()
    await test_db.refresh(invoice)
    test_db.expunge(invoice)
    return invoice
