from typing import Optional, Any


class WishLinkError(Exception):
    """
    Base exception for WishLink.

    Subclasses set the HTTP status, the machine-readable code and a
    default message; callers usually only pass a user-facing message.
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Unexpected error"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ResourceNotFoundError(WishLinkError):
    """Unknown wish id, unknown code, or nothing to confirm."""
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class AuthenticationError(WishLinkError):
    """Wrong password, no session, or a session for another phone."""
    status_code = 401
    code = "AUTHENTICATION_FAILED"
    default_message = "Authentication failed"


class ConflictError(WishLinkError):
    """Phone already registered."""
    status_code = 409
    code = "CONFLICT"
    default_message = "Resource already exists"


class ValidationError(WishLinkError):
    status_code = 422
    code = "VALIDATION_ERROR"
    default_message = "Validation error"
