"""
Bloggy Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.

Fixtures:
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── db_engine: fresh in-memory SQLite database (aiosqlite) per test
    ├── storage: FileService rooted in a temporary directory
    ├── sample_png_bytes: minimal PNG bytes for upload tests
    └── test_client: HTTPX AsyncClient talking to the app over ASGI, with
                     get_db_session overridden to use db_engine
"""

import os
import tempfile

# Settings are read when app.config is first imported; point them at
# throwaway resources before any app module loads
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="bloggy_test_")
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, List
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db_session
from app.models import category as category_model, post as post_model  # noqa: F401
from app.services.file_service import FileService


# ══════════════════════════════════════════════════════════════════════════
# Service-level fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    session.add records objects in session.added; flush() assigns the
    column defaults a real flush would (id, timestamps).

    Usage:
        async def test_get_post(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
            result = await post_service.get_post(mock_db_session, str(post.id))
    """
    from datetime import datetime, timezone

    added: List[object] = []

    async def flush():
        for obj in added:
            if getattr(obj, "id", None) is None:
                obj.id = uuid4()
            for attr in ("created_at", "published_at"):
                if hasattr(obj, attr) and getattr(obj, attr) is None:
                    setattr(obj, attr, datetime.now(timezone.utc))

    session = AsyncMock()
    session.added = added
    session.execute = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.flush = AsyncMock(side_effect=flush)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock(side_effect=added.append)
    return session


@pytest.fixture
def storage(tmp_path, monkeypatch):
    """
    A FileService writing into tmp_path, installed wherever the app
    looks up the file_service singleton.
    """
    service = FileService(storage_root=str(tmp_path / "images"))
    monkeypatch.setattr("app.services.post_service.file_service", service)
    monkeypatch.setattr("app.routes.files.file_service", service)
    return service


@pytest.fixture
def sample_png_bytes():
    """PNG signature followed by a minimal IHDR chunk."""
    return (
        b"\x89PNG\r\n\x1a\n"
        b"\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00"
        b"\x90wS\xde"
    )


# ══════════════════════════════════════════════════════════════════════════
# Database + HTTP fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A fresh in-memory database for each test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    Usage:
        async def test_list_posts(test_client):
            response = await test_client.get("/api/posts")
            assert response.status_code == 200
    """
    from app.main import app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
