"""
Bloggy Backend — Post Service (Business Logic)
================================================

What:  Store operations for blog posts: list, fetch, create; update and
       delete are declared but not implemented.
Why:   Keeps HTTP concerns in the routes and persistence rules here.
How:   Stateless; every call receives the request's AsyncSession.
Who:   Called by the post route handlers.

Category resolution:
    Every post returned by this service carries its category resolved to the
    full record. The reference is not enforced at write time, so resolution
    is best-effort: a post whose category_id matches no stored category is
    returned with category=None.

Create Flow (POST /api/posts):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Upload  │───▶│  Store      │───▶│  Validate    │───▶│  Insert  │
    │  (Route) │    │  image      │    │  fields      │    │  (DB)    │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    On failure after the image was stored, the image is deleted before the
    error propagates to the global handler.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import (
    BloggyError,
    DatabaseError,
    InvalidIdentifierError,
    NotFoundError,
    NotImplementedOperationError,
    ValidationError,
)
from app.models.category import Category
from app.models.post import Post
from app.schemas.blog import PostResponse
from app.services.category_service import to_category_response
from app.services.file_service import file_service
from app.services.validation import parse_identifier, validate_post_fields

logger = logging.getLogger(__name__)

POST_RESOURCE = "blog post"


def to_post_response(post: Post, category: Optional[Category]) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        category_id=post.category_id,
        category=to_category_response(category) if category is not None else None,
        published_at=post.published_at,
        image_url=f"/api/files/{post.image_path}" if post.image_path else None,
    )


class UploadedImage:
    """An image part received with a create request."""

    def __init__(self, filename: str, content: bytes):
        self.filename = filename
        self.content = content


class PostService:
    """
    Business logic layer for post operations.

    Error Handling Strategy:
        SQLAlchemy failures are wrapped in DatabaseError (generic message,
        details logged). Application exceptions propagate unchanged.
    """

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """
        Return every post in storage order with its category resolved.

        Raises:
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Post)
                .options(selectinload(Post.category))
                .order_by(Post.published_at, Post.id)
            )
            posts = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve blog posts. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [to_post_response(post, post.category) for post in posts]

    async def get_post(self, db: AsyncSession, post_id: str) -> PostResponse:
        """
        Retrieve a single post by ID.

        Repeated calls with the same id return the same record; reads have
        no side effects.

        Raises:
            InvalidIdentifierError: post_id is not a UUID (→ 400)
            NotFoundError: no post with that id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        parsed_id = parse_identifier(post_id, POST_RESOURCE)

        try:
            result = await db.execute(
                select(Post)
                .options(selectinload(Post.category))
                .where(Post.id == parsed_id)
            )
            post = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", parsed_id, str(e))
            raise DatabaseError(
                message="Server error while fetching the blog post",
                context={"post_id": str(parsed_id), "error_type": type(e).__name__},
            )

        if post is None:
            logger.info("Post %s not found", parsed_id)
            raise NotFoundError(resource=POST_RESOURCE, resource_id=str(parsed_id))

        return to_post_response(post, post.category)

    async def create_post(
        self,
        db: AsyncSession,
        title: Optional[str],
        content: Optional[str],
        category: Optional[str],
        image: Optional[UploadedImage] = None,
    ) -> PostResponse:
        """
        Create a post, optionally with an uploaded image.

        Workflow Steps:
            1. Validate and store the image, if one was uploaded
            2. Validate title, content and category (non-blank)
            3. Parse the category reference (must be a UUID; existence
               is not checked)
            4. Insert the post; published_at defaults to now
            5. Resolve the category for the response

        Error Recovery:
            Any failure after step 1 deletes the stored image.

        Raises:
            ValidationError: invalid fields or upload (→ 400)
            FileStorageError: image could not be written (→ 500)
            DatabaseError: insert failed (→ 500)
        """
        absolute_path: Optional[str] = None
        relative_path: Optional[str] = None

        if image is not None:
            absolute_path, relative_path = await file_service.validate_and_store(
                filename=image.filename,
                content=image.content,
            )

        try:
            validate_post_fields(title, content, category)
            try:
                category_id = parse_identifier(category, "category")
            except InvalidIdentifierError as e:
                raise ValidationError(
                    message="Invalid category ID format",
                    field="category",
                    context=e.context,
                )

            post = Post(
                title=title,
                content=content,
                category_id=category_id,
                image_path=relative_path,
            )
            db.add(post)
            await db.flush()  # Assigns id and published_at without committing
            resolved = await db.get(Category, category_id)

            if resolved is None:
                logger.warning(
                    "Post %s references category %s, which does not exist",
                    post.id,
                    category_id,
                )
            logger.info("Post created: %s (category=%s)", post.id, category_id)
            return to_post_response(post, resolved)

        except Exception as e:
            if absolute_path:
                await file_service.cleanup_file(absolute_path)
            if isinstance(e, BloggyError):
                raise
            logger.error("Error saving blog post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create new blog post due to an internal error",
                context={"original_error": type(e).__name__},
            )

    async def update_post(
        self,
        db: AsyncSession,
        post_id: str,
        fields: Dict[str, Any],
    ) -> PostResponse:
        """Declared contract for editing a post; performs no mutation."""
        logger.info("Rejected update of post %s: not implemented", post_id)
        raise NotImplementedOperationError(
            operation="update post",
            context={"post_id": post_id, "fields": sorted(fields)},
        )

    async def delete_post(self, db: AsyncSession, post_id: str) -> None:
        """Declared contract for removing a post; performs no mutation."""
        logger.info("Rejected delete of post %s: not implemented", post_id)
        raise NotImplementedOperationError(
            operation="delete post",
            context={"post_id": post_id},
        )


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
