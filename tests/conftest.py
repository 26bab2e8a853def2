"""Shared pytest fixtures for all tests."""

import os

# Settings are read once at import time, so the environment must be in place
# before anything under discovery/ is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ADMIN_TOKEN"] = "test-admin-token"
os.environ["CRON_SECRET"] = "test-cron-secret"
os.environ["ALLOWED_ORIGINS"] = "http://localhost:3000,https://*.indiranagar.example"
os.environ["OPENWEATHER_API_KEY"] = ""
os.environ["WEATHERAPI_KEY"] = ""
os.environ["GOOGLE_PLACES_API_KEY"] = ""
os.environ["ENFORCE_PLACE_WHITELIST"] = "true"

import uuid
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from discovery.database import get_db
from discovery.main import app
from discovery.models import Base, Journey, JourneyStop, Place
from discovery.services.cache import weather_cache
from discovery.services.rate_limit import (
    community_suggestion_limiter,
    question_limiter,
    weather_limiter,
)
from discovery.stores.search_history import reset_histories

ADMIN_HEADERS = {"Authorization": "Bearer test-admin-token"}

# Inside the Indiranagar box
INSIDE = (12.9784, 77.6408)


@pytest.fixture(autouse=True)
def reset_process_state():
    """Limiters, caches and histories are module-level; start every test clean."""
    weather_limiter.reset()
    question_limiter.reset()
    community_suggestion_limiter.reset()
    weather_cache.clear()
    reset_histories()
    yield
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def engine() -> AsyncEngine:
    """In-memory SQLite shared by every session of one test."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory: async_sessionmaker) -> AsyncClient:
    """HTTP client against the app, with get_db pointed at the test engine."""

    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_place(db_session: AsyncSession):
    """Insert a Place. Defaults describe an approved Indiranagar cafe."""

    async def _make(**overrides: Any) -> Place:
        values: dict[str, Any] = {
            "name": "Glen's Bakehouse",
            "description": "Bakery and cafe with cakes and breakfast",
            "category": "cafe",
            "latitude": INSIDE[0],
            "longitude": INSIDE[1],
            "rating": 4.3,
            "weather_suitability": {},
            "meta": {},
        }
        values.update(overrides)
        place = Place(**values)
        db_session.add(place)
        await db_session.commit()
        await db_session.refresh(place)
        return place

    return _make


@pytest.fixture
def make_journey(db_session: AsyncSession):
    """Insert a published Journey with one stop per given place."""

    async def _make(places: list[Place], **overrides: Any) -> Journey:
        values: dict[str, Any] = {
            "slug": f"walk-{uuid.uuid4().hex[:8]}",
            "title": "Morning walk",
            "description": "Coffee and a stroll",
            "mood_tags": ["chill"],
            "difficulty": "easy",
            "weather_suitability": {},
            "is_published": True,
        }
        values.update(overrides)
        journey = Journey(**values)
        journey.stops = [
            JourneyStop(place_id=place.id, stop_order=i) for i, place in enumerate(places)
        ]
        db_session.add(journey)
        await db_session.commit()
        return journey

    return _make
