"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cryptosports.auth.password import hash_password
from cryptosports.db.models import User
from cryptosports.db.seed import seed_reference_data
from cryptosports.db.store import MemoryStore
from cryptosports.main import create_app

TEST_PASSWORD = "SecureP@ss1"


class FrozenClock:
    """Store clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest_asyncio.fixture
async def store(clock: FrozenClock) -> MemoryStore:
    """A store seeded with players, staking plans and achievements."""
    s = MemoryStore(clock=clock)
    await seed_reference_data(s)
    return s


@pytest_asyncio.fixture
async def user(store: MemoryStore) -> User:
    """A user with no holdings."""
    return await store.create_user(
        username="trader",
        password_hash=hash_password(TEST_PASSWORD),
        email="trader@example.com",
    )


@pytest.fixture
def app(store: MemoryStore) -> FastAPI:
    # ASGITransport does not run the lifespan, so the store is seeded by the fixture above
    return create_app(store=store)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def logged_in_client(client: AsyncClient, user: User) -> AsyncClient:
    """Client holding a session cookie for ``user``."""
    response = await client.post("/api/login", json={"username": user.username, "password": TEST_PASSWORD})
    assert response.status_code == 200
    return client
