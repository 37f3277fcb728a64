from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class UnauthorizedError(DomainError):
    """Raised when no caller identity could be resolved."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when the caller's role does not allow the action."""

    def __init__(self, role: Optional[str]):
        self.role = role
        super().__init__(f"Forbidden (role={role if role is not None else 'undefined'})")


class NotFoundError(DomainError):
    """Raised when a referenced person or record does not exist."""


class ConflictError(DomainError):
    """Raised when a contact is already used within the same cohort."""
