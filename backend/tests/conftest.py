"""Pytest configuration and fixtures."""

import os
import tempfile
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Create a temporary directory for test paths
_test_tmp_dir = tempfile.mkdtemp(prefix="inkfolio_test_")

# Set config paths BEFORE importing app modules
os.environ["INKFOLIO_CONFIG_PATH"] = str(Path(_test_tmp_dir) / "config")
os.environ.setdefault("INKFOLIO_PREFERRED_LOCALE", "fr")

from app.db import get_db
from app.db.base import Base, json_serializer
from app.db.models import Artist, City, User, UserRole
from app.main import app


@pytest.fixture
async def db_engine():
    """Create an in-memory test database engine."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, json_serializer=json_serializer
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(db_engine):
    """Create a test client with overridden database dependency."""
    async_session = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )

    async def override_get_db():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def artist(db_session: AsyncSession) -> Artist:
    """An artist in Lyon, with its user account, committed."""
    city = City(name="Lyon", slug="lyon", postal_code="69001", region_name="Auvergne-Rhône-Alpes")
    db_session.add(city)
    await db_session.flush()

    user = User(
        full_name="Camille Martin",
        email="camille@example.com",
        role=UserRole.ARTIST,
        city_id=city.id,
    )
    db_session.add(user)
    await db_session.flush()

    artist = Artist(
        user_id=user.id,
        city_id=city.id,
        stage_name="Camille Ink",
        slug="camille-ink",
    )
    db_session.add(artist)
    await db_session.commit()
    return artist


def pytest_sessionfinish(session, exitstatus):
    """Clean up temp directories after test session."""
    import shutil
    if Path(_test_tmp_dir).exists():
        shutil.rmtree(_test_tmp_dir, ignore_errors=True)
