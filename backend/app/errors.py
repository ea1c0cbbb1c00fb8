"""
Application Errors — the four failure kinds callers must be able to tell apart.

Usage:
    from app.errors import NotFound

    raise NotFound("Payment", payment_id)
"""
from typing import Any, Optional


class AppError(Exception):
    """Base error rendered as ``{"detail", "error_code", "retryable"}``.

    Attributes:
        code: Stable machine-readable error code.
        status: HTTP status code.
        message: User-facing message.
        details: Extra context for logs and non-production responses.
    """

    code = "INTERNAL_ERROR"
    status = 500
    message = "Internal server error"
    retryable = False

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(self.message)

    def to_dict(self, include_details: bool = False) -> dict:
        body = {
            "detail": self.message,
            "error_code": self.code,
            "retryable": self.retryable,
        }
        if include_details and self.details:
            body["details"] = self.details
        return body


class AuthenticationFailed(AppError):
    """Credential mismatch, unknown email, or an unusable bearer token."""

    code = "AUTHENTICATION_FAILED"
    status = 401
    message = "Invalid email or password"


class NotFound(AppError):
    code = "NOT_FOUND"
    status = 404

    def __init__(self, resource: str = "Resource", identifier: Any = None):
        super().__init__(
            f"{resource} not found",
            details={"resource": resource, "id": identifier},
        )


class ValidationFailed(AppError):
    code = "VALIDATION_FAILED"
    status = 400
    message = "Invalid request"


class TransientStoreFailure(AppError):
    """Backing store unreachable or timed out; safe to retry."""

    code = "TRANSIENT_STORE_FAILURE"
    status = 503
    message = "Payment store temporarily unavailable, please retry"
    retryable = True


class RateLimited(AppError):
    """Too many attempts from one client inside the throttle window."""

    code = "RATE_LIMITED"
    status = 429
    message = "Too many attempts, please wait and retry"
    retryable = True

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(
            f"Too many attempts. Try again in {retry_after} seconds.",
            details={"retry_after": retry_after},
        )
