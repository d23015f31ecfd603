"""
Bloggy Backend — Category Service Unit Tests
==============================================

Uses mock DB sessions (no real database).
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, ValidationError
from app.services.category_service import CategoryService


def _mock_category(name="Tech", description="T"):
    category = MagicMock()
    category.id = uuid4()
    category.name = name
    category.description = description
    category.created_at = datetime.now(timezone.utc)
    return category


class TestCategoryServiceList:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_list_categories_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_categories(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_categories_keeps_query_order(self, mock_db_session):
        rows = [_mock_category("A"), _mock_category("B")]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_categories(mock_db_session)

        assert [c.name for c in result] == ["A", "B"]
        assert result[0].id == rows[0].id

    @pytest.mark.asyncio
    async def test_list_categories_wraps_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError):
            await self.service.list_categories(mock_db_session)


class TestCategoryServiceCreate:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_create_category_assigns_id(self, mock_db_session):
        result = await self.service.create_category(mock_db_session, "Tech", "T")

        assert result.name == "Tech"
        assert result.description == "T"
        assert result.id is not None
        assert len(mock_db_session.added) == 1
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_blank_description_stored_as_null(self, mock_db_session):
        result = await self.service.create_category(mock_db_session, "Tech", "   ")
        assert result.description is None

    @pytest.mark.asyncio
    async def test_blank_name_rejected_before_write(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.create_category(mock_db_session, "   ", "T")

        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()
