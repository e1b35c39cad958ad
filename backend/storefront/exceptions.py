"""
Storefront Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios services detect.
How:   Each exception class carries a message, an optional context dict, the
       HTTP status it maps to and a machine-readable error code. Global
       exception handlers (registered in main.py) turn them into structured
       JSON error responses.
Who:   Raised by services, security helpers and route dependencies.

Exception Hierarchy:
    StorefrontError (base)                      → 500
    ├── ValidationError     invalid_data          → 400 (client can fix input)
    ├── NotAllowedError     not_allowed           → 400 (operation forbidden by rules)
    ├── UnauthorizedError   unauthorized          → 401
    ├── NotFoundError       not_found             → 404
    ├── InvalidStateError   invalid_state_error   → 409
    ├── DuplicateError      invalid_request_error → 422
    ├── FileStorageError    server_error          → 500
    └── DatabaseError       server_error          → 500
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all Storefront application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (returned as `details` only for 4xx errors)
    """

    status_code: int = 500
    code: str = "unknown_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """
    Raised when client input fails a business validation rule.

    When:    Unknown currency, tax rate out of range, invalid ISO code, bad email.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "invalid_data",
            "message": "Invalid country code: 'xx'",
            "details": {"field": "country_code"}
        }
    """

    status_code = 400
    code = "invalid_data"

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


class NotAllowedError(StorefrontError):
    """Raised when a well-formed request asks for something the rules forbid."""

    status_code = 400
    code = "not_allowed"


class UnauthorizedError(StorefrontError):
    """
    Raised when a request lacks valid credentials.

    When:    Missing/expired token, wrong password, unknown API token.
    HTTP:    401 Unauthorized
    """

    status_code = 401
    code = "unauthorized"

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(StorefrontError):
    """
    Raised when a requested resource does not exist.

    When:    GET /admin/regions/{id} with an unknown or soft-deleted id.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; services convert that None
    into NotFoundError so route handlers never check for it.
    """

    status_code = 404
    code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        message: Optional[str] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with id '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class InvalidStateError(StorefrontError):
    """Raised when the resource is in a state that conflicts with the request (409)."""

    status_code = 409
    code = "invalid_state_error"


class DuplicateError(StorefrontError):
    """
    Raised when a create/attach would break a uniqueness rule.

    When:    Country already assigned to another region, email already taken,
             currency already added to the store.
    HTTP:    422 Unprocessable Entity
    """

    status_code = 422
    code = "invalid_request_error"


class FileStorageError(StorefrontError):
    """
    Raised when file system operations fail.

    When:    Disk full, permission denied, directory not writable, I/O error.
    HTTP:    500 Internal Server Error

    The file path and OS error go into `context` for logging; the client only
    sees the generic message.
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(StorefrontError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. SQL, constraint
        names and driver errors are logged server-side only.
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
