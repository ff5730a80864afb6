"""
TextShelf Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for each failure a store operation can
       report to its caller.
Why:   The store stays free of HTTP concerns; status codes are decided in one
       place.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the resource store and the bootstrap loader; caught by
       global handlers or by the lifespan hook.

Exception Hierarchy:
    TextShelfError (base)
    ├── InvalidInputError      → 400 Bad Request (text fails validation)
    │   └── InvalidQueryError  → 400 Bad Request (missing search term)
    ├── NotFoundError          → 404 Not Found
    ├── SearchFailedError      → 500 Internal Server Error
    └── BootstrapError         → aborts startup (never reaches a client)

Store operations report outcomes by raising; the store never builds HTTP
responses itself.
"""

from typing import Any, Dict, Optional


class TextShelfError(Exception):
    """
    Base exception for all TextShelf application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, and returned only where the
                  handler chooses to)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidInputError(TextShelfError):
    """
    Raised when a client-supplied resource body fails validation.

    When:    Missing text, non-string text, or text shorter than the minimum
             length after trimming.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Text is required and must be at least 3 characters long.",
            "details": {"field": "text"}
        }
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


class InvalidQueryError(InvalidInputError):
    """Raised when a search is requested without a query term (HTTP 400)."""

    def __init__(
        self,
        message: str = "Missing query parameter 'q'",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, field="q", context=context)


class NotFoundError(TextShelfError):
    """
    Raised when a requested resource does not exist.

    When:    Unknown id on get/update/delete, an empty store on random fetch,
             or a search with zero matches.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"Could not find that {resource}."
            if resource_id is not None:
                message = f"Could not find {resource} with ID '{resource_id}'."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class SearchFailedError(TextShelfError):
    """
    Raised when building or evaluating a search pattern fails unexpectedly.

    HTTP:    500 Internal Server Error

    The client only sees a generic "Search failed" message. The underlying
    error type is kept in the context for the server log.
    """

    def __init__(
        self,
        message: str = "Search failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class BootstrapError(TextShelfError):
    """
    Raised when the startup data file cannot be read or holds invalid records.

    The store cannot operate without its initial data, so the lifespan hook
    lets this propagate and uvicorn aborts startup.
    """

    def __init__(
        self,
        message: str = "Could not load bootstrap resources",
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message=message, context=ctx)
        self.path = path
