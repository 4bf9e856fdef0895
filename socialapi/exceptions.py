"""
SocialAPI Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error outcomes of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    SocialAPIError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    ├── ConflictError     → 409 Conflict (username/email already taken)
    └── DatabaseError     → 500 Internal Server Error

A thought that was created but could not be linked to its author is not an
error: the service returns it with a `warning` attached.
"""

from typing import Any, Dict, Optional


class SocialAPIError(Exception):
    """
    Base exception for all SocialAPI application errors.

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


class ValidationError(SocialAPIError):
    """
    Raised when client input fails validation.

    When:    Malformed ObjectId, empty update body, befriending oneself.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "'abc' is not a valid userId",
            "details": {"field": "userId"}
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


class NotFoundError(SocialAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE on an unknown user or thought id, an add-friend
             whose friend id does not resolve, a reaction by an unknown user.
    HTTP:    404 Not Found

    Motor returns None for missing documents (not an exception); services
    convert None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"No {resource} with ID '{resource_id}'"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ConflictError(SocialAPIError):
    """
    Raised when a write collides with a unique index.

    When:    Creating or renaming a user onto a username or email already in use.
    HTTP:    409 Conflict

    `field` names the colliding attribute and is returned in `details`.
    """

    def __init__(
        self,
        field: str,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"A user with that {field} already exists"
        if value is not None:
            message = f"A user with {field} '{value}' already exists"
        ctx = context or {}
        ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(SocialAPIError):
    """
    Raised when a MongoDB operation fails unexpectedly.

    When:    Server unreachable, write concern failure, any PyMongoError that is
             not a duplicate-key collision.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the pymongo error
    is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
