"""Application-level exception types.

This module defines domain errors raised by the todo store and the HTTP
layer, enabling consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    hint: str
    resource: str
    limit: int
    actual_value: int
    todo_id: int
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when caller input fails validation."""


class InvalidIdAppError(ValidationAppError):
    """Raised when a todo id is outside the plausible id space."""


class PayloadTooLargeAppError(AppError):
    """Raised when todo text exceeds the character limit."""


class CapacityExceededAppError(AppError):
    """Raised when a user or per-user todo quota would be exceeded."""


class AuthenticationAppError(AppError):
    """Raised when authentication/authorization fails."""
