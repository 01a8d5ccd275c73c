"""
Shared fixtures: a fresh in-memory SQLite database per test and an HTTP client bound to it.
"""
import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from photogallery import models
from photogallery.database import Base, get_db
from photogallery.main import app
from photogallery.utils.jwt_auth import create_access_token


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token({"role": "admin", "sub": "gallery_admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_gallery(db):
    """Insert a gallery directly, bypassing the registry."""
    async def _make(slug="summer-trip", title="Summer trip"):
        gallery = models.Gallery(slug=slug, title=title, is_published=True)
        db.add(gallery)
        await db.commit()
        await db.refresh(gallery)
        return gallery
    return _make


@pytest.fixture
def make_photo(db):
    """Insert a photo directly with an explicit order."""
    async def _make(gallery_id, order, url="https://cdn.example.com/p.jpg"):
        photo = models.Photo(gallery_id=gallery_id, url=url, order=order)
        db.add(photo)
        await db.commit()
        await db.refresh(photo)
        return photo
    return _make
