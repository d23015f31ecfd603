"""
Bloggy Backend — Category SQLAlchemy Model
============================================

What:  ORM model representing the `categories` table.
Who:   Used by CategoryService for listing/creation, by PostService when
       resolving a post's category, and by Alembic for schema management.

Lifecycle:
    Created through POST /api/category. No exposed operation updates or
    deletes a category.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Category(Base):
    """A named grouping that posts reference by identifier."""

    __tablename__ = "categories"

    # Generated in Python so the id is known right after flush on every backend
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # No uniqueness constraint: two categories may share a name
    name: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
