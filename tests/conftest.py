"""Shared test fixtures for Blog3."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from blog3.config import Settings
from blog3.database import create_engine
from blog3.main import create_app, init_state
from blog3.models import Base
from blog3.models.post import Post

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

PUBLISH_DAY = datetime(2024, 3, 5, 9, 30, tzinfo=UTC)


@asynccontextmanager
async def create_test_client(settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP test client with a fully initialized app.

    Runs the startup half of the lifespan by hand because ASGITransport does
    not trigger it.
    """
    app = create_app(settings)
    settings.validate_runtime_security()
    await init_state(app, settings)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    await app.state.engine.dispose()


class FakeClock:
    """Deterministic clock that advances only when told to."""

    def __init__(self, start: datetime = PUBLISH_DAY) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


async def make_post(session: AsyncSession, title: str = "Some Post") -> Post:
    """Insert a bare post row so slug rows have something to reference."""
    post = Post(
        id=uuid.uuid4(),
        title=title,
        subtitle=None,
        content="body",
        published_at=PUBLISH_DAY,
        updated_at=PUBLISH_DAY,
    )
    session.add(post)
    await session.flush()
    return post


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings with temporary paths."""
    db_path = tmp_path / "test.db"
    return Settings(
        _env_file=None,
        debug=True,
        database_url=f"sqlite+aiosqlite:///{db_path}",
        assets_dir=tmp_path / "assets",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def db_engine_and_factory(
    test_settings: Settings,
) -> AsyncGenerator[tuple[AsyncEngine, async_sessionmaker[AsyncSession]]]:
    """Create a test database engine with the schema in place."""
    engine, session_factory = create_engine(test_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine, session_factory
    await engine.dispose()


@pytest.fixture
def db_engine(
    db_engine_and_factory: tuple[AsyncEngine, async_sessionmaker[AsyncSession]],
) -> AsyncEngine:
    return db_engine_and_factory[0]


@pytest.fixture
def session_factory(
    db_engine_and_factory: tuple[AsyncEngine, async_sessionmaker[AsyncSession]],
) -> async_sessionmaker[AsyncSession]:
    return db_engine_and_factory[1]


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session
