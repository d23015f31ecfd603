"""
Bloggy Backend — Custom Exception Hierarchy
=============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the JSON error envelope {success: false, error, message}.
Who:   Raised by services; caught by global handlers.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    BloggyError (base)
    ├── ValidationError               → 400 Bad Request (client can fix)
    ├── InvalidIdentifierError        → 400 Bad Request (malformed id)
    ├── NotFoundError                 → 404 Not Found
    ├── NotImplementedOperationError  → 501 Not Implemented
    ├── FileStorageError              → 500 Internal Server Error
    └── DatabaseError                 → 500 Internal Server Error

Nothing is retried: every failure is terminal for its request.
"""

from typing import Any, Dict, Optional


class BloggyError(Exception):
    """
    Base exception for all Bloggy application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BloggyError):
    """
    Raised when client input fails validation.

    When:    Missing or blank required form fields, unsupported upload type,
             oversized upload, malformed category reference.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidIdentifierError(BloggyError):
    """
    Raised when an identifier in the URL is not a well-formed UUID.

    When:    GET /api/posts/not-an-id
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        resource: str = "resource",
        raw_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if raw_id is not None:
            ctx["raw_id"] = raw_id
        super().__init__(message=f"Invalid {resource} ID format", context=ctx)


class NotFoundError(BloggyError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing records; the service layer converts
    that into this exception so the route stays free of status-code logic.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class NotImplementedOperationError(BloggyError):
    """
    Raised by operations whose contract is declared but not built yet.

    When:    PUT /api/posts/{id}, DELETE /api/posts/{id}
    HTTP:    501 Not Implemented
    """

    def __init__(
        self,
        operation: str = "operation",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["operation"] = operation
        super().__init__(
            message=f"The '{operation}' operation is not implemented yet",
            context=ctx,
        )
        self.operation = operation


class FileStorageError(BloggyError):
    """
    Raised when file system operations fail.

    When:    Disk full, permission denied, directory not writable, I/O error.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(BloggyError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    The message is always generic; the original error type is kept in
    context and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
