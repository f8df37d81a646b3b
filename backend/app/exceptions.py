"""
StrayLink Backend — Custom Exception Hierarchy
================================================

What:  Application exceptions, each mapped to one HTTP status and error code.
How:   Every exception carries a user-safe `message` and a `context` dict
       for logs. main.py turns them into the JSON error envelope:

           {"error": <error_code>, "message": ..., "details": ..., "request_id": ...}

Exception Hierarchy:
    StrayLinkError (base)            500  server_error
    ├── ValidationError              400  validation_error
    ├── NotFoundError                404  not_found
    ├── RateLimitExceededError       429  rate_limit_exceeded
    └── DatabaseError                500  server_error (context never exposed)

The share responder never lets NotFoundError or DatabaseError reach the
client; both become fallback preview content there.
"""

from typing import Any, Dict, Optional


class StrayLinkError(Exception):
    """
    Base exception for all StrayLink application errors.

    Attributes:
        message:  Safe to return to the client
        context:  Debug info for logs only
    """

    status_code = 500
    error_code = "server_error"
    # When False the response body has no `details`
    expose_context = False
    # Replaces `message` in the response body when set
    public_message: Optional[str] = None

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def headers(self) -> Dict[str, str]:
        return {}

    def to_payload(self, request_id: str = "") -> Dict[str, Any]:
        """The JSON error envelope for this exception."""
        payload: Dict[str, Any] = {
            "error": self.error_code,
            "message": self.public_message or self.message,
        }
        if self.expose_context:
            payload["details"] = self.context
        payload["request_id"] = request_id
        return payload


class ValidationError(StrayLinkError):
    """
    Client input broke a business rule (unsupported filter value and such).

    Schema violations never get here; FastAPI answers those with 422.
    """

    status_code = 400
    error_code = "validation_error"
    expose_context = True

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(StrayLinkError):
    """No published article (or other resource) matches the identifier."""

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        else:
            message = f"The requested {resource} was not found"
        ctx = dict(context or {}, resource=resource)
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(StrayLinkError):
    """
    A query against the hosted database failed: connection lost, statement
    timeout, permission denied by row-level security.

    The client always gets a generic message; the context goes to the log.
    """

    public_message = "An internal error occurred. Please try again later."

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(StrayLinkError):
    """Per-IP request budget used up; carries the Retry-After value."""

    status_code = 429
    error_code = "rate_limit_exceeded"
    expose_context = True

    def __init__(self, retry_after: int = 60, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Too many requests. Please wait {retry_after} seconds before retrying.",
            context=dict(context or {}, retry_after=retry_after),
        )
        self.retry_after = retry_after

    @property
    def headers(self) -> Dict[str, str]:
        return {"Retry-After": str(self.retry_after)}
