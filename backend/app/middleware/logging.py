"""
Bloggy Backend — Request Logging Middleware
=============================================

What:  One access line per request on the `bloggy.access` logger.
How:   Times call_next and logs method, path, status, duration and request
       ID. Writes also record how the body was sent (json, form, multipart),
       since the create routes accept all three.
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Levels:
    5xx or an exception escaping the app → ERROR
    4xx                                  → WARNING
    image fetches under /api/files/      → DEBUG
    everything else                      → INFO
    /health                              → not logged

Request bodies are never logged (post content may be large).
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("bloggy.access")

WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}
FILES_PREFIX = "/api/files/"


def body_kind(request: Request) -> Optional[str]:
    """Short label for the body encoding of a write request, or None."""
    if request.method not in WRITE_METHODS:
        return None
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        return "json"
    if content_type == "multipart/form-data":
        return "multipart"
    if content_type == "application/x-www-form-urlencoded":
        return "form"
    return content_type or "none"


def access_level(path: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if path.startswith(FILES_PREFIX):
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path == "/health":
            return await call_next(request)

        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            kind = body_kind(request)
            logger.log(
                access_level(path, status),
                "%s %s%s -> %d in %.1fms [%s]",
                request.method,
                path,
                f" ({kind})" if kind else "",
                status,
                elapsed_ms,
                request_id_var.get(""),
            )
