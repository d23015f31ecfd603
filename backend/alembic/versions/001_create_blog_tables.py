"""Create categories and posts tables

Revision ID: 001
Revises: None
Create Date: 2024-03-01 00:00:00.000000+00:00

What:  Creates the `categories` and `posts` tables.
Note:  posts.category_id has no foreign key; posts reference
       categories by id and tolerate dangling references.

Rollback: downgrade() drops both tables (all data is lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("image_path", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    # Resolving categories for a listing looks posts up by category id
    op.create_index("idx_posts_category_id", "posts", ["category_id"])
    # Listing order
    op.create_index("idx_posts_published_at", "posts", ["published_at"])


def downgrade() -> None:
    op.drop_index("idx_posts_published_at", table_name="posts")
    op.drop_index("idx_posts_category_id", table_name="posts")
    op.drop_table("posts")
    op.drop_table("categories")
