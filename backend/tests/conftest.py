"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db, get_cache and get_event_publisher are overridden on the app;
      the lifespan never runs, so no Redis/Kafka/Postgres is contacted
    - `cache` and `publisher` fixtures can be redefined per test module to
      inject failing fakes

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Seeded users get a cheap password hash (low iteration count)
"""

import os

# Ensure tests never point at a real database or broker
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("REDIS_URL", "")
os.environ.setdefault("KAFKA_BOOTSTRAP_SERVERS", "")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from tracker.api.dependencies import get_cache, get_event_publisher  # noqa: E402
from tracker.config import get_settings  # noqa: E402
from tracker.core.security import create_access_token, hash_password  # noqa: E402
from tracker.db.base import Base  # noqa: E402
from tracker.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, get_db,
)
import tracker.infrastructure.database as db_module  # noqa: E402
import tracker.models  # noqa: E402,F401
from tracker.main import app  # noqa: E402
from tracker.models.project import Project  # noqa: E402
from tracker.models.user import User  # noqa: E402

from tests.fakes import RecordingCache, RecordingPublisher  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
def cache():
    return RecordingCache()


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
async def client(test_engine, test_session_factory, cache, publisher):
    """FastAPI test client with DB, cache and event bus overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_event_publisher] = lambda: publisher

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
async def seed_user(test_db):
    """Insert an ACTIVE user directly into the test DB."""
    user = User(
        name="Ada", email="ada@example.com",
        password_hash=hash_password("correct-horse", iterations=1_000),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
def auth_headers(seed_user):
    settings = get_settings()
    token = create_access_token(
        seed_user.id, settings.jwt_secret_key, settings.jwt_algorithm,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def seed_project(test_db, seed_user):
    project = Project(name="Seeded", user_id=seed_user.id)
    test_db.add(project)
    await test_db.commit()
    await test_db.refresh(project)
    return project
