"""
Bloggy Backend — Post SQLAlchemy Model
========================================

What:  ORM model representing the `posts` table.
Who:   Used by PostService for CRUD operations and by Alembic.

Table Design Rationale:
    - category_id has NO foreign key constraint. A post references its
      category by identifier only; the reference is resolved best-effort at
      read time and may dangle (the category may never have existed).
    - The `category` relationship is view-only and lazy="raise": it must be
      eager-loaded (selectinload) so async code never triggers implicit IO.
      A dangling reference loads as None.
    - title is unbounded Text, like content; no length limit applies.
    - published_at defaults to the creation time; clients never set it.
    - image_path is the relative path (from the storage root) of an image
      uploaded with the post, if any.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.category import Category


class Post(Base):
    """A blog article: title, content, category reference, publish timestamp."""

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    category_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)

    published_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    image_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default=None)

    category: Mapped[Optional[Category]] = relationship(
        Category,
        primaryjoin="foreign(Post.category_id) == Category.id",
        viewonly=True,
        lazy="raise",
    )

    __table_args__ = (
        Index("idx_posts_category_id", "category_id"),
        Index("idx_posts_published_at", "published_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, title='{self.title}', "
            f"category_id={self.category_id})>"
        )
