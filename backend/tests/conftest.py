"""
Pytest fixtures for test database, client, and authentication.

Each test gets its own SQLite database file (set TEST_DATABASE_URL to run
against PostgreSQL instead). Every HTTP request and every factory call uses a
fresh session, so concurrent requests behave as they do in production.
"""

import os
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from hotel_booking.main import app
from hotel_booking.db.base import Base
from hotel_booking.db.session import build_engine, build_sessionmaker, get_db
from hotel_booking.models import User, Room

import factories

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create tables, yield engine, then drop tables for isolation."""
    url = TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'hotel_booking_test.db'}"
    test_engine = build_engine(url)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(engine)


@pytest_asyncio.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests each run in their own test-database transaction."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def error_client(client) -> AsyncGenerator[AsyncClient, None]:
    """Same app and test database, but unhandled errors come back as 500 responses."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def test_user(session_factory) -> User:
    """User with no enrollment."""
    return await factories.create_user(session_factory)


@pytest_asyncio.fixture
async def eligible_user(session_factory) -> User:
    """Enrolled user holding a PAID, in-person ticket that includes hotel."""
    return await factories.create_eligible_user(session_factory)


@pytest_asyncio.fixture
async def auth_headers(eligible_user: User) -> dict:
    return factories.auth_headers_for(eligible_user)


@pytest_asyncio.fixture
async def test_room(session_factory) -> Room:
    """Empty room with capacity 2."""
    hotel = await factories.create_hotel(session_factory)
    return await factories.create_room(session_factory, hotel.id, capacity=2)


@pytest_asyncio.fixture
async def full_room(session_factory) -> Room:
    """Room with capacity 1 already occupied by another user."""
    hotel = await factories.create_hotel(session_factory)
    room = await factories.create_room(session_factory, hotel.id, capacity=1)
    occupant = await factories.create_eligible_user(session_factory)
    await factories.create_booking_record(session_factory, occupant.id, room.id)
    return room
