"""
Bloggy Backend — Post Route Handlers
======================================

What:  Handles the /api/posts resource.
How:   Extracts path parameters and body fields (JSON or form), delegates
       to PostService, and returns the success envelope. Service errors are
       turned into {success: false, ...} responses by the global handlers in
       main.py.

Route Inventory:
    GET    /api/posts        list posts (category resolved)
    GET    /api/posts/{id}   fetch one post
    POST   /api/posts        create a post (JSON or form; multipart may add an image)
    PUT    /api/posts/{id}   501 Not Implemented
    DELETE /api/posts/{id}   501 Not Implemented
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.blog import (
    ErrorResponse,
    PostCreatedEnvelope,
    PostEnvelope,
    PostListEnvelope,
)
from app.routes.request_body import (
    is_form,
    is_json,
    read_json_object,
    request_body_openapi,
    text_fields,
)
from app.services.post_service import UploadedImage, post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Posts"])

POST_FIELDS = ("title", "content", "category")

NOT_IMPLEMENTED_RESPONSE = {
    501: {"description": "Operation not implemented", "model": ErrorResponse},
}


@router.get(
    "/posts",
    response_model=PostListEnvelope,
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all blog posts",
    description="Returns every post with its category resolved (null if the category is missing).",
)
async def list_posts(
    db: AsyncSession = Depends(get_db_session),
) -> PostListEnvelope:
    posts = await post_service.list_posts(db)
    return PostListEnvelope(blog=posts)


@router.get(
    "/posts/{post_id}",
    response_model=PostEnvelope,
    responses={
        400: {"description": "Malformed post id", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single blog post by ID",
)
async def get_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PostEnvelope:
    """
    Args:
        post_id: Taken as a plain string so a malformed id reaches the
                 service and is reported as 400 rather than FastAPI's 422.
    """
    post = await post_service.get_post(db, post_id)
    return PostEnvelope(blog=post)


@router.post(
    "/posts",
    status_code=201,
    response_model=PostCreatedEnvelope,
    responses={
        201: {"description": "Post created", "model": PostCreatedEnvelope},
        400: {"description": "Missing fields or invalid upload", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a blog post",
    description=(
        "Creates a post from fields `title`, `content` and `category` (a "
        "category id), sent as a JSON object or as form data. A multipart "
        "form may also attach an optional `image` file (PNG or JPEG)."
    ),
    openapi_extra=request_body_openapi(
        {
            "title": {"type": "string"},
            "content": {"type": "string"},
            "category": {"type": "string", "format": "uuid"},
        },
        with_image=True,
    ),
)
async def create_post(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> PostCreatedEnvelope:
    if is_json(request):
        fields = text_fields(await read_json_object(request), POST_FIELDS)
        post = await post_service.create_post(db=db, **fields)
        return PostCreatedEnvelope(post=post)

    form = await request.form()
    try:
        fields = text_fields(form, POST_FIELDS)
        upload = await _read_image(form.get("image"))
        post = await post_service.create_post(db=db, image=upload, **fields)
        return PostCreatedEnvelope(post=post)
    finally:
        await form.close()


async def _read_image(part: Any) -> Optional[UploadedImage]:
    if not isinstance(part, UploadFile) or not part.filename:
        return None

    content = await part.read()
    logger.info(
        "Received post image: filename=%s, declared type=%s, size=%d bytes",
        part.filename,
        part.content_type,
        len(content),
    )
    return UploadedImage(filename=part.filename, content=content)


@router.put(
    "/posts/{post_id}",
    responses=NOT_IMPLEMENTED_RESPONSE,
    summary="Update a blog post (not implemented)",
)
async def update_post(
    post_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
):
    if is_json(request):
        fields = await read_json_object(request)
    elif is_form(request):
        fields = dict(await request.form())
    else:
        fields = {}
    await post_service.update_post(db, post_id, fields)


@router.delete(
    "/posts/{post_id}",
    responses=NOT_IMPLEMENTED_RESPONSE,
    summary="Delete a blog post (not implemented)",
)
async def delete_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
):
    await post_service.delete_post(db, post_id)
