"""
Domain error taxonomy.

Every error raised by the service layer is an AppError subclass carrying its
HTTP status; main.py turns them into JSON responses.
"""
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, error: str, details: Optional[Any] = None, **extra: Any):
        super().__init__(error)
        self.error = error
        self.details = details
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        body.update(self.extra)
        return body


class BadRequestError(AppError):
    """Malformed non-field input or a violated business rule."""
    status_code = 400


class ValidationError(AppError):
    """Field-level input errors, always reported together."""
    status_code = 400

    def __init__(self, errors: Dict[str, str], message: str = "Validation failed"):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class AuthError(AppError):
    """Missing, invalid or expired credentials."""
    status_code = 401


class AuthorizationError(AppError):
    """Authenticated, but the role or ownership does not allow the action."""
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409
