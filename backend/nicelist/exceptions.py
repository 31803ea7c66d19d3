"""
Nice List Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for each failure class the core reports.
How:   Each exception carries a user-facing message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into structured
       JSON error responses with the matching HTTP status code.
Who:   Raised by repositories and the request-validation handler.

Exception Hierarchy:
    NiceListError (base)             → 500 Internal Server Error
    ├── ValidationError              → 400 Bad Request (client can fix)
    ├── NotFoundError                → 404 Not Found (reads only)
    ├── ReferentialIntegrityError    → 409 Conflict (foreign key target missing)
    └── DatabaseError                → 500 Internal Server Error

Mutations that match no row (judge, delete, review) do not raise; they report
success. Only lookups raise NotFoundError.
"""

from typing import Any, Dict, Optional


class NiceListError(Exception):
    """
    Base exception for all Nice List application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where noted)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NiceListError):
    """
    Raised when client input fails validation.

    When:    Missing body fields, wrong types, non-integer path ids,
             empty names or texts, severity outside 1-5.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "name: Value error, name must not be empty",
            "details": {"field": "name", "errors": [...]}
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


class NotFoundError(NiceListError):
    """
    Raised when a lookup by id yields nothing.

    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; repositories convert that
    None into this exception for read operations.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ReferentialIntegrityError(NiceListError):
    """
    Raised when an insert references a row that does not exist.

    When:    Recording an infraction for an unknown person, or submitting an
             appeal whose person or infraction is missing. Detected by the
             storage foreign-key constraint, never by a prior lookup.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "A referenced record does not exist",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(NiceListError):
    """
    Raised when a storage operation fails unexpectedly.

    When:    Connection lost, commit failure, constraint violation outside the
             foreign-key cases above.
    HTTP:    500 Internal Server Error

    The message returned to clients is always generic; the context (driver
    error type, ids involved) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
