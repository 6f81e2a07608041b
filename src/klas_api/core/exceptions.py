from __future__ import annotations

from typing import Any, Optional

from .enums import ErrorCode


class DomainError(Exception):
    """Base exception for business rule violations.

    Each subclass maps to one HTTP status; `code` and `status_code` can be
    overridden per raise when a use case needs a different mapping.
    """

    status_code = 400
    default_code = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: Optional[ErrorCode] = None,
        details: Any = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details
        if status_code is not None:
            self.status_code = int(status_code)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the bearer token is missing or cannot be resolved to a user."""

    status_code = 401
    default_code = ErrorCode.UNAUTHORIZED


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403
    default_code = ErrorCode.FORBIDDEN


class NotFoundError(DomainError):
    status_code = 404
    default_code = ErrorCode.NOT_FOUND


class ConflictError(DomainError):
    status_code = 409
    default_code = ErrorCode.CONFLICT


class ConfigurationError(DomainError):
    status_code = 500
    default_code = ErrorCode.CONFIGURATION_ERROR


class UpstreamError(DomainError):
    """Raised when Supabase (tables, auth or storage) reports a failure."""

    status_code = 500
    default_code = ErrorCode.UPSTREAM_ERROR
