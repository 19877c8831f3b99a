"""
Blog Backend — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions, one per error kind of the API contract.
Why:   Services detect bad input, missing rows, and ownership violations and
       raise a typed error; global handlers registered in main.py turn each
       kind into its status code and a `{"error": "<message>"}` body.
How:   Each class carries a user-safe message, an optional context dict
       (logged, never returned), and its HTTP status code.

Exception Hierarchy:
    BlogError (base)
    ├── BadRequestError     → 400 Bad Request (malformed/missing input)
    ├── UnauthorizedError   → 401 Unauthorized (token or login failure)
    ├── ForbiddenError      → 403 Forbidden (not the resource owner)
    ├── NotFoundError       → 404 Not Found (resource absent)
    ├── ConflictError       → 409 Conflict (duplicate registration)
    └── InternalError       → 500 Internal Server Error (opaque to clients)
"""

from typing import Any, Dict, Optional


class BlogError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:     User-facing error description (returned in the response)
        context:     Additional debug info (logged but NOT returned to client)
        status_code: HTTP status used by the global handler
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BadRequestError(BlogError):
    """
    Raised when client input fails shape validation.

    When: Missing required fields, non-numeric path ids, short passwords.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Bad request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnauthorizedError(BlogError):
    """
    Raised for a missing/invalid bearer token or rejected login.

    Login failures always use the same message whether the email is unknown
    or the password is wrong.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(BlogError):
    """Authenticated caller is not the owner of the resource it tries to change."""

    status_code = 403

    def __init__(
        self,
        message: str = "Forbidden",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(BlogError):
    """
    Raised when a referenced resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception, with a message naming the resource ("Post not found").
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ConflictError(BlogError):
    """Raised when registration targets an email that already has an account."""

    status_code = 409

    def __init__(
        self,
        message: str = "User already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InternalError(BlogError):
    """
    Raised when an operation fails unexpectedly.

    Security Note:
        The message returned to the client is always generic. Detailed error
        info is logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
