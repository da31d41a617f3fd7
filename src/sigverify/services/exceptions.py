"""Service error hierarchy mapped to HTTP responses.

This module defines the exception hierarchy for service-level errors:
- ServiceError: Base for all service errors (500)
- ValidationError: Bad client input (400)
- UnauthorizedError: Missing or invalid credentials (401)
- ForbiddenError: Authenticated but not allowed (403)
- NotFoundError: Requested resource does not exist (404)

Only ValidationError forwards its own message to the client; the others
answer with a fixed message so internal details never leak.
"""


class ServiceError(Exception):
    """Base exception for all service errors."""

    status_code = 500
    public_message: str | None = "Internal server error"

    @property
    def message(self) -> str:
        """Client-safe error message."""
        return self.public_message or str(self)


class ValidationError(ServiceError):
    """Client supplied invalid input."""

    status_code = 400
    public_message = None


class UnauthorizedError(ServiceError):
    """Request is not authenticated."""

    status_code = 401
    public_message = "Unauthorized"


class ForbiddenError(ServiceError):
    """Request is authenticated but not permitted."""

    status_code = 403
    public_message = "Forbidden"


class NotFoundError(ServiceError):
    """Requested resource does not exist."""

    status_code = 404
    public_message = "Not found"
