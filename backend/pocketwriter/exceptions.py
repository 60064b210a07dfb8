"""
Pocket Writer — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the backend and the discovery client.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch the backend
       ones and return structured JSON error responses.
Who:   Raised by services and stores; caught by global handlers or, on the
       client side, by the backend resolver.

Exception Hierarchy:
    PocketWriterError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    ├── ConfigStoreError         → client side only (discovery config persistence)
    └── ApiClientError           → client side only (REST call failed)
"""

from typing import Any, Dict, Optional


class PocketWriterError(Exception):
    """
    Base exception for all Pocket Writer application errors.

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


class ValidationError(PocketWriterError):
    """
    Raised when client input fails a business-rule validation.

    When:    JSON payload fields that are not well-formed JSON, unknown sort fields.
    HTTP:    400 Bad Request

    Schema-level checks (blank strings, lengths) are left to Pydantic,
    which FastAPI reports as 422.

    Example response:
        {
            "error": "validation_error",
            "message": "contentData must be valid JSON: Expecting value: line 1 column 1",
            "details": {"field": "contentData"}
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


class NotFoundError(PocketWriterError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/templates/{id} or /api/articles/{id} with an unknown id,
             or an article referencing an unknown template.
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
            message = f"{resource.capitalize()} with ID {resource_id} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(PocketWriterError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the detailed
    error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigStoreError(PocketWriterError):
    """
    Raised when the discovery configuration store cannot persist an endpoint.

    Fatal to the operation that triggered the write only; the backend
    resolver converts it into a failed DiscoveryResult.
    """

    def __init__(
        self,
        message: str = "Could not persist backend configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ApiClientError(PocketWriterError):
    """
    Raised by PocketWriterClient when a REST call fails.

    Attributes:
        status_code: HTTP status of the failed response (None on transport errors)
    """

    def __init__(
        self,
        message: str = "Request to the Pocket Writer backend failed",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
