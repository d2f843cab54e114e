from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` maps form field names to messages so the view can report them per field.
    """

    def __init__(self, message: str = "Please correct the highlighted fields", errors: Optional[dict[str, str]] = None):
        super().__init__(message)
        self.errors: dict[str, str] = dict(errors or {})


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
