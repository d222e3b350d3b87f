"""Pytest configuration and fixtures for the dispatch service.

Environment is set before any app import so get_settings() validates.
Repository, sweep and API tests run against a throwaway SQLite file
(aiosqlite); Postgres-only checks are marked requires_db.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test-dispatch.db")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

from datetime import datetime, timezone  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import get_settings  # noqa: E402
from app.domain.entities.change_event import ChangeEvent  # noqa: E402
from app.infrastructure.messaging.outbox import DispatchOutbox  # noqa: E402
from app.infrastructure.persistence import models  # noqa: E402, F401
from app.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from app.infrastructure.persistence.models import AdminUser, Contact  # noqa: E402
from app.main import app  # noqa: E402

get_settings.cache_clear()

FIXED_NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite database with the full schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'dispatch.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Session for repository tests. Tests commit explicitly when they need to."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def directory(session_factory) -> SimpleNamespace:
    """Two admin users and one contact referenced by tasks."""
    async with session_factory() as session, session.begin():
        session.add_all(
            [
                AdminUser(id="usr_ana", full_name="Ana Ortiz", phone="+15550101", email="ana@example.com"),
                AdminUser(id="usr_ben", full_name="Ben Cole", phone="+15550102", email="ben@example.com"),
                Contact(id="con_acme", full_name="Acme Buyer", phone="+15550199", email="buyer@acme.test"),
            ]
        )
    return SimpleNamespace(assignee="usr_ana", assigner="usr_ben", contact="con_acme")


@pytest.fixture
def delivered() -> list[ChangeEvent]:
    """Events that reached the outbox handler."""
    return []


@pytest.fixture
async def outbox(delivered):
    """Running outbox whose handler only records events."""

    async def record(event: ChangeEvent) -> None:
        delivered.append(event)

    box = DispatchOutbox(record, workers=1, max_size=100)
    await box.start()
    yield box
    await box.stop(drain=False)


@pytest.fixture
def sweep_stub() -> SimpleNamespace:
    """Stand-in for ReminderSweep; records calls."""

    async def run(now=None):
        from app.application.dtos.reminder import SweepResult

        sweep_stub.calls += 1
        return SweepResult(processed_count=0, reminder_ids=[])

    sweep_stub = SimpleNamespace(calls=0, run=run)
    return sweep_stub


@pytest.fixture
async def client(session_factory, outbox, sweep_stub) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) bound to the test database.

    ASGITransport does not run the lifespan, so the dispatch runtime is
    replaced by the recording outbox.
    """

    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def override_get_db_transactional():
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_db_transactional] = override_get_db_transactional
    app.state.dispatch = SimpleNamespace(outbox=outbox, sweep=sweep_stub)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    app.state.dispatch = None


def pytest_collection_modifyitems(config, items):
    """Skip requires_db tests unless TEST_POSTGRES_URL points at a PostgreSQL database."""
    if os.environ.get("TEST_POSTGRES_URL"):
        return
    skip = pytest.mark.skip(reason="TEST_POSTGRES_URL not set")
    for item in items:
        if "requires_db" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
async def pg_session_factory():
    """Session factory on a PostgreSQL database with a freshly created schema."""
    engine = create_async_engine(os.environ["TEST_POSTGRES_URL"])
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
