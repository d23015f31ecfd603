"""
Bloggy Backend — Post Service Unit Tests
==========================================

Uses mock DB sessions (no real database). Image handling runs against
the temporary `storage` fixture.
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from sqlalchemy.exc import OperationalError

from app.exceptions import (
    DatabaseError,
    InvalidIdentifierError,
    NotFoundError,
    NotImplementedOperationError,
    ValidationError,
)
from app.models.post import Post
from app.services.post_service import PostService, UploadedImage


def _mock_category(name="Tech"):
    category = MagicMock()
    category.id = uuid4()
    category.name = name
    category.description = None
    category.created_at = datetime.now(timezone.utc)
    return category


def _mock_post(category=None, category_id=None):
    post = MagicMock()
    post.id = uuid4()
    post.title = "Hello"
    post.content = "World"
    post.category_id = category.id if category is not None else (category_id or uuid4())
    post.category = category
    post.published_at = datetime.now(timezone.utc)
    post.image_path = None
    return post


class TestPostServiceRead:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_list_posts_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_posts(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_posts_resolves_categories(self, mock_db_session):
        tech = _mock_category("Tech")
        rows = [_mock_post(category=tech), _mock_post(category=None)]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_posts(mock_db_session)

        assert result[0].category.name == "Tech"
        assert result[1].category is None
        assert result[1].category_id == rows[1].category_id

    @pytest.mark.asyncio
    async def test_get_post_malformed_id(self, mock_db_session):
        with pytest.raises(InvalidIdentifierError):
            await self.service.get_post(mock_db_session, "not-an-id")

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_post_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError):
            await self.service.get_post(mock_db_session, str(uuid4()))

    @pytest.mark.asyncio
    async def test_get_post_found(self, mock_db_session):
        tech = _mock_category("Tech")
        post = _mock_post(category=tech)
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = post
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_post(mock_db_session, str(post.id))

        assert result.id == post.id
        assert result.category.id == tech.id
        assert result.image_url is None

    @pytest.mark.asyncio
    async def test_get_post_with_dangling_category(self, mock_db_session):
        post = _mock_post(category=None)
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = post
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_post(mock_db_session, str(post.id))

        assert result.category is None

    @pytest.mark.asyncio
    async def test_get_post_wraps_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError, match="Server error while fetching the blog post"):
            await self.service.get_post(mock_db_session, str(uuid4()))


class TestPostServiceCreate:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_create_post_without_image(self, mock_db_session):
        category_id = uuid4()
        before = datetime.now(timezone.utc)

        result = await self.service.create_post(
            mock_db_session, "Hello", "World", str(category_id)
        )

        assert result.title == "Hello"
        assert result.category_id == category_id
        assert result.category is None
        assert result.published_at >= before
        assert result.image_url is None
        assert isinstance(mock_db_session.added[0], Post)

    @pytest.mark.asyncio
    async def test_create_post_resolves_existing_category(self, mock_db_session):
        tech = _mock_category("Tech")
        mock_db_session.get = AsyncMock(return_value=tech)

        result = await self.service.create_post(
            mock_db_session, "Hello", "World", str(tech.id)
        )

        assert result.category.name == "Tech"

    @pytest.mark.asyncio
    async def test_blank_title_rejected(self, mock_db_session):
        with pytest.raises(ValidationError, match="Missing or invalid required fields"):
            await self.service.create_post(mock_db_session, "   ", "World", str(uuid4()))

        assert mock_db_session.added == []

    @pytest.mark.asyncio
    async def test_non_uuid_category_rejected(self, mock_db_session):
        with pytest.raises(ValidationError, match="Invalid category ID format"):
            await self.service.create_post(mock_db_session, "Hello", "World", "tech")

        assert mock_db_session.added == []

    @pytest.mark.asyncio
    async def test_create_post_with_image(self, mock_db_session, storage, sample_png_bytes):
        image = UploadedImage("photo.png", sample_png_bytes)

        result = await self.service.create_post(
            mock_db_session, "Hello", "World", str(uuid4()), image=image
        )

        assert result.image_url.startswith("/api/files/")
        relative = result.image_url[len("/api/files/"):]
        assert (storage.storage_root / relative).read_bytes() == sample_png_bytes

    @pytest.mark.asyncio
    async def test_image_removed_when_fields_invalid(
        self, mock_db_session, storage, sample_png_bytes
    ):
        image = UploadedImage("photo.png", sample_png_bytes)

        with pytest.raises(ValidationError):
            await self.service.create_post(mock_db_session, "", "World", str(uuid4()), image=image)

        stored = [p for p in storage.storage_root.rglob("*") if p.is_file()]
        assert stored == []

    @pytest.mark.asyncio
    async def test_image_removed_when_insert_fails(
        self, mock_db_session, storage, sample_png_bytes
    ):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk full"))
        )
        image = UploadedImage("photo.png", sample_png_bytes)

        with pytest.raises(DatabaseError):
            await self.service.create_post(
                mock_db_session, "Hello", "World", str(uuid4()), image=image
            )

        stored = [p for p in storage.storage_root.rglob("*") if p.is_file()]
        assert stored == []

    @pytest.mark.asyncio
    async def test_rejected_image_stops_before_insert(self, mock_db_session, storage):
        image = UploadedImage("notes.txt", b"plain text")

        with pytest.raises(ValidationError):
            await self.service.create_post(
                mock_db_session, "Hello", "World", str(uuid4()), image=image
            )

        assert mock_db_session.added == []

    @pytest.mark.asyncio
    async def test_script_named_png_rejected_and_not_stored(self, mock_db_session, storage):
        image = UploadedImage("evil.png", b"<?php system($_GET['c']); ?>")

        with pytest.raises(ValidationError, match="PNG or JPEG"):
            await self.service.create_post(
                mock_db_session, "Hello", "World", str(uuid4()), image=image
            )

        assert mock_db_session.added == []
        assert not storage.storage_root.exists() or not any(
            p.is_file() for p in storage.storage_root.rglob("*")
        )

    @pytest.mark.asyncio
    async def test_long_title_kept_whole(self, mock_db_session):
        title = "x" * 300

        result = await self.service.create_post(mock_db_session, title, "World", str(uuid4()))

        assert result.title == title

    def test_title_and_category_name_columns_are_unbounded(self):
        from sqlalchemy import Text

        from app.models.category import Category

        assert isinstance(Post.__table__.c.title.type, Text)
        assert Post.__table__.c.title.type.length is None
        assert isinstance(Category.__table__.c.name.type, Text)
        assert Category.__table__.c.name.type.length is None


class TestPostServiceUnimplemented:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_update_not_implemented(self, mock_db_session):
        with pytest.raises(NotImplementedOperationError):
            await self.service.update_post(mock_db_session, str(uuid4()), {"title": "x"})

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_not_implemented(self, mock_db_session):
        with pytest.raises(NotImplementedOperationError):
            await self.service.delete_post(mock_db_session, str(uuid4()))

        mock_db_session.execute.assert_not_awaited()
