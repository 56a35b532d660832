"""Pytest configuration and fixtures."""

import asyncio
import hashlib
import hmac
import json
import os
import sys
import time
from urllib.parse import urlencode

# Settings are read at import time; point them at test values first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "botsecret")
os.environ.setdefault("ADMIN_SESSION_SECRET", "test-admin-session-secret")
os.environ.setdefault("ADMIN_TELEGRAM_IDS", "")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from api.deps import get_authenticator, get_db
from auth.authenticator import RequestAuthenticator
from auth.backends import StatelessSessionBackend, StoreBackedSessionBackend
from db import Base
from main import app

# Fix Windows asyncio event loop
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

BOT_TOKEN = "botsecret"
ADMIN_SESSION_SECRET = "test-admin-session-secret"
SESSION_TTL_SECONDS = 3600


@pytest_asyncio.fixture(scope="function")
async def db_session():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def init_data_factory():
    """Build init data strings signed the way the Telegram client signs them."""

    def _sign(fields: dict[str, str], bot_token: str = BOT_TOKEN) -> str:
        check_string = "\n".join(f"{key}={fields[key]}" for key in sorted(fields))
        secret_key = hmac.new(b"WebAppData", bot_token.encode(), hashlib.sha256).digest()
        signature = hmac.new(secret_key, check_string.encode(), hashlib.sha256).hexdigest()
        return urlencode({**fields, "hash": signature})

    def _create(
        user: dict | None = None,
        auth_date: int | None = None,
        bot_token: str = BOT_TOKEN,
        raw_user: str | None = None,
        **extra: str,
    ) -> str:
        fields = {
            "auth_date": str(int(time.time()) if auth_date is None else auth_date),
            "user": raw_user if raw_user is not None else json.dumps(
                user if user is not None else {"id": 42}, separators=(",", ":")
            ),
        }
        fields.update(extra)
        return _sign(fields, bot_token)

    _create.sign = _sign
    return _create


@pytest.fixture
def stateless_backend():
    return StatelessSessionBackend(ADMIN_SESSION_SECRET, SESSION_TTL_SECONDS)


@pytest.fixture
def store_backend():
    return StoreBackedSessionBackend(SESSION_TTL_SECONDS)


@pytest.fixture
def authenticator_factory(stateless_backend):
    """Factory for authenticators with a given allow-list and backend."""

    def _create(allow_list=(), backend=None, trust_user_id_header=False):
        return RequestAuthenticator(
            backend=backend or stateless_backend,
            allow_list=frozenset(allow_list),
            trust_user_id_header=trust_user_id_header,
        )

    return _create


@pytest.fixture
def override_get_db(db_session):
    """Override get_db dependency for testing."""

    async def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def use_authenticator(override_get_db):
    """Install an authenticator for the app under test."""

    def _use(authenticator: RequestAuthenticator) -> RequestAuthenticator:
        app.dependency_overrides[get_authenticator] = lambda: authenticator
        return authenticator

    return _use


@pytest_asyncio.fixture
async def client(override_get_db):
    """Async HTTP client bound to the app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="https://testserver") as ac:
        yield ac


def cookie_header(token: str) -> dict:
    """Headers carrying the admin cookie."""
    return {"Cookie": f"tg_admin={token}"}


@pytest.fixture
def admin_cookie():
    return cookie_header
