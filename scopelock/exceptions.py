"""
ScopeLock error hierarchy.

Each error carries a short machine-readable code and the HTTP status the
API layer renders it with.
"""

from typing import Optional, Any


class ScopeLockError(Exception):
    """Base class for all errors surfaced to API clients."""

    status_code: int = 500
    default_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(ScopeLockError):
    """Missing or invalid bearer credential."""

    status_code = 401
    default_code = "unauthorized"

    def __init__(self, message: str = "Unauthorized", details: Optional[Any] = None):
        super().__init__(message, details=details)


class InputValidationError(ScopeLockError):
    """A required field is missing or empty."""

    status_code = 400
    default_code = "missing_fields"


class QuotaExceededError(ScopeLockError):
    """Free-tier monthly proposal cap reached."""

    status_code = 403
    default_code = "free_limit_reached"

    def __init__(self, message: str = "Free plan limit reached", details: Optional[Any] = None):
        super().__init__(message, details=details)


class PermissionDeniedError(ScopeLockError):
    status_code = 403
    default_code = "forbidden"


class NotFoundError(ScopeLockError):
    status_code = 404
    default_code = "not_found"


class AlreadySignedError(ScopeLockError):
    status_code = 409
    default_code = "already_signed"

    def __init__(
        self,
        message: str = "This proposal has already been signed",
        details: Optional[Any] = None,
    ):
        super().__init__(message, details=details)


class InvalidTransitionError(ScopeLockError):
    status_code = 409
    default_code = "invalid_transition"


class UpstreamError(ScopeLockError):
    """An external collaborator (LLM, database) failed."""

    status_code = 500
    default_code = "internal_error"

    def __init__(self, message: str = "Internal server error", details: Optional[Any] = None):
        super().__init__(message, details=details)
