"""
Blog API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for each error outcome of the API.
How:   Each exception carries a message and an optional context dict.
       Global handlers (registered in main.py) turn them into
       `{"message": ...}` JSON responses with the matching status code.
Who:   Raised by the store connector and the post service.

Exception Hierarchy:
    BlogError (base)
    ├── ValidationError        → 400 Bad Request (create/update failures)
    ├── NotFoundError          → 404 Not Found
    ├── DatabaseError          → 500 Internal Server Error (read/delete failures)
    └── StoreConnectionError   → fatal at startup, never reaches a client
"""

from typing import Any, Dict, Optional


class BlogError(Exception):
    """
    Base exception for all Blog API errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged, never returned to the client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogError):
    """
    Raised when a create or update request cannot be applied.

    Covers malformed payloads, malformed ids on update, and any failure the
    store reports while writing.
    HTTP: 400 Bad Request
    """

    status_code = 400

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


class NotFoundError(BlogError):
    """
    Raised when a requested post does not exist, or no posts exist at all.

    HTTP: 404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Post not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(BlogError):
    """
    Raised when a read or delete against the store fails.

    The message of the underlying error is passed through to the client;
    the exception type and id are kept in context for the logs.
    HTTP: 500 Internal Server Error
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreConnectionError(BlogError):
    """
    Raised when the document store cannot be reached at startup.

    Not mapped to an HTTP response: the lifespan lets it escape so the
    server aborts and the process exits. There is no retry.
    """

    def __init__(
        self,
        message: str = "Could not connect to the document store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
