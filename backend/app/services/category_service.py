"""
Bloggy Backend — Category Service
===================================

What:  Store operations for categories: list all, create one.
How:   Receives the request's AsyncSession for every call; holds no state.
Who:   Called by the category route handlers.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError
from app.models.category import Category
from app.schemas.blog import CategoryResponse
from app.services.validation import validate_category_fields

logger = logging.getLogger(__name__)


def to_category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        name=category.name,
        description=category.description,
        created_at=category.created_at,
    )


class CategoryService:
    """
    Business logic layer for category operations.

    Responsibilities:
        - list_categories(): every category in storage order
        - create_category(): validate the name, then persist
    """

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        """
        Return all categories ordered by creation time.

        An empty table yields an empty list, never an error.

        Raises:
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Category).order_by(Category.created_at, Category.id)
            )
            categories = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing categories: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve categories. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [to_category_response(category) for category in categories]

    async def create_category(
        self,
        db: AsyncSession,
        name: Optional[str],
        description: Optional[str] = None,
    ) -> CategoryResponse:
        """
        Persist a new category.

        Args:
            db: Async database session
            name: Category label (required, non-blank)
            description: Optional free text; blank is stored as NULL

        Raises:
            ValidationError: name is missing or blank (→ 400)
            DatabaseError: Insert failed (→ 500)
        """
        validate_category_fields(name)

        category = Category(
            name=name,
            description=description if description and description.strip() else None,
        )
        try:
            db.add(category)
            await db.flush()  # Assigns defaults without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating category: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create new category due to an internal error",
                context={"error_type": type(e).__name__},
            )

        logger.info("Category created: %s (%s)", category.id, category.name)
        return to_category_response(category)


# ── Singleton Instance ────────────────────────────────────────────────────
category_service = CategoryService()
