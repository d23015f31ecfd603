"""
Bloggy Backend — Uploaded File Route
======================================

What:  GET /api/files/{path} serves images uploaded with posts.
Who:   Clients follow the `imageUrl` of a post.

Security:
    - Path is resolved inside STORAGE_ROOT; anything escaping it is a 400
    - Only files that FileService stored can be reached
"""

import logging

from fastapi import APIRouter
from fastapi.responses import FileResponse

from app.exceptions import NotFoundError
from app.schemas.blog import ErrorResponse
from app.services.file_service import file_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Files"])


@router.get(
    "/files/{file_path:path}",
    summary="Serve uploaded image files",
    responses={
        200: {"description": "Image file"},
        400: {"description": "Invalid path", "model": ErrorResponse},
        404: {"description": "File not found", "model": ErrorResponse},
    },
)
async def serve_file(file_path: str) -> FileResponse:
    full_path = file_service.resolve_stored_path(file_path)

    if not full_path.is_file():
        raise NotFoundError(resource="file", resource_id=file_path)

    # media_type is inferred from the extension
    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
