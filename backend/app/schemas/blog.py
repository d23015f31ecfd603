"""
Bloggy Backend — Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the API contract between clients and backend.
Why:   Automatic serialization and OpenAPI doc generation.
How:   Routes return the envelope models below; FastAPI serializes them with
       field aliases (camelCase on the wire: publishedAt, categoryId, ...).

Envelope shapes:
    GET  /api/posts        → {success: true, blog: [Post]}
    GET  /api/posts/{id}   → {success: true, blog: Post}
    GET  /api/category     → {success: true, blog: [Category]}
    POST /api/category     → {success: true, category: Category, message}
    POST /api/posts        → {success: true, post: Post, message}
    any failure            → {success: false, error, message, request_id}
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Record Models
# ══════════════════════════════════════════════════════════════════════════


class CategoryResponse(BaseModel):
    """Full representation of a category."""
    id: uuid.UUID = Field(description="Unique category identifier (UUID)")
    name: str = Field(description="Short category label")
    description: Optional[str] = Field(default=None, description="Free text description")
    created_at: datetime = Field(alias="createdAt", description="When the category was created")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PostResponse(BaseModel):
    """
    Full representation of a blog post.

    category_id is the stored reference; category is that reference
    resolved to the full record, or null when it does not match any
    stored category.
    """
    id: uuid.UUID = Field(description="Unique post identifier (UUID)")
    title: str = Field(description="Post title")
    content: str = Field(description="Post body")
    category_id: uuid.UUID = Field(alias="categoryId", description="Referenced category id")
    category: Optional[CategoryResponse] = Field(
        default=None,
        description="Resolved category; null for a dangling reference",
    )
    published_at: datetime = Field(alias="publishedAt", description="Publish timestamp (UTC)")
    image_url: Optional[str] = Field(
        default=None,
        alias="imageUrl",
        description="URL path of the image uploaded with the post, if any",
    )

    model_config = ConfigDict(populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Envelopes
# ══════════════════════════════════════════════════════════════════════════


class PostListEnvelope(BaseModel):
    success: bool = True
    blog: List[PostResponse]


class PostEnvelope(BaseModel):
    success: bool = True
    blog: PostResponse


class CategoryListEnvelope(BaseModel):
    success: bool = True
    blog: List[CategoryResponse]


class CategoryCreatedEnvelope(BaseModel):
    success: bool = True
    category: CategoryResponse
    message: str = "New Category Created"


class PostCreatedEnvelope(BaseModel):
    success: bool = True
    post: PostResponse
    message: str = "New Blog Post Created Successfully"


class ErrorResponse(BaseModel):
    """
    Standardized error envelope for all API errors.

    Example:
        {
            "success": false,
            "error": "not_found",
            "message": "Blog post with ID '...' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    success: bool = False
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
