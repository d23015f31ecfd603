"""
Bloggy Backend — Category Route Handlers
==========================================

What:  GET /api/category (list) and POST /api/category (create).
How:   Extracts body fields (JSON or form), delegates to CategoryService,
       wraps the result in the success envelope.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.blog import (
    CategoryCreatedEnvelope,
    CategoryListEnvelope,
    ErrorResponse,
)
from app.routes.request_body import (
    is_json,
    read_json_object,
    request_body_openapi,
    text_fields,
)
from app.services.category_service import category_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Categories"])

# The `category` field carries the category name
CATEGORY_FIELDS = ("category", "description")


@router.get(
    "/category",
    response_model=CategoryListEnvelope,
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all categories",
)
async def list_categories(
    db: AsyncSession = Depends(get_db_session),
) -> CategoryListEnvelope:
    categories = await category_service.list_categories(db)
    return CategoryListEnvelope(blog=categories)


@router.post(
    "/category",
    status_code=200,
    response_model=CategoryCreatedEnvelope,
    responses={
        400: {"description": "Missing category name", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a category",
    description=(
        "Creates a category from a JSON object or form data. The `category` "
        "field carries the category name; `description` is optional."
    ),
    openapi_extra=request_body_openapi(
        {
            "category": {"type": "string"},
            "description": {"type": "string"},
        },
    ),
)
async def create_category(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryCreatedEnvelope:
    if is_json(request):
        fields = text_fields(await read_json_object(request), CATEGORY_FIELDS)
    else:
        async with request.form() as form:
            fields = text_fields(form, CATEGORY_FIELDS)

    created = await category_service.create_category(
        db=db,
        name=fields["category"],
        description=fields["description"],
    )
    return CategoryCreatedEnvelope(category=created)
