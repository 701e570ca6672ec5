"""Todo store interfaces and quota constants.

Quotas are fixed at build time. They bound memory use of the process-wide
store, so they are deliberately not read from the environment.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

MAX_USERS = 1_000
MAX_TODOS_PER_USER = 500
MAX_TODO_CHARS = 1_000

# Opaque caller identity; the HTTP layer derives it from the API key.
TenantKey = bytes


@dataclass(frozen=True)
class Todo:
    """A single todo owned by exactly one tenant.

    Attributes:
        id: Globally unique, never reused identifier.
        text: Todo content, at most ``max_todo_chars`` characters.
    """

    id: int
    text: str


@dataclass(frozen=True)
class StoreLimits:
    """Quotas enforced by a todo store on every mutation."""

    max_users: int = MAX_USERS
    max_todos_per_user: int = MAX_TODOS_PER_USER
    max_todo_chars: int = MAX_TODO_CHARS

    def __post_init__(self) -> None:
        for name in ("max_users", "max_todos_per_user", "max_todo_chars"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1")


DEFAULT_LIMITS = StoreLimits()


class AbstractTodoStore(ABC):
    """Interface for per-tenant todo stores."""

    @property
    @abstractmethod
    def limits(self) -> StoreLimits:
        """Quotas this store enforces."""
        raise NotImplementedError

    @abstractmethod
    def list_todos(self, tenant: TenantKey) -> list[Todo]:
        """Return the tenant's todos in insertion order ([] if unknown)."""
        raise NotImplementedError

    @abstractmethod
    def add_todo(self, tenant: TenantKey, text: str) -> Todo:
        """Append a new todo for the tenant, creating the tenant if needed.

        Raises:
            PayloadTooLargeAppError: If text exceeds the character limit.
            CapacityExceededAppError: If the user or per-user quota is full.
        """
        raise NotImplementedError

    @abstractmethod
    def update_todo(self, tenant: TenantKey, todo_id: int, text: str) -> bool:
        """Replace the text of one of the tenant's todos.

        Returns:
            True if a todo was changed, False if the tenant owns no such id.

        Raises:
            PayloadTooLargeAppError: If text exceeds the character limit.
            InvalidIdAppError: If the id fails ``is_valid_id``.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_todo(self, tenant: TenantKey, todo_id: int) -> bool:
        """Remove one of the tenant's todos.

        Returns:
            True if a todo was removed, False if the tenant owns no such id.

        Raises:
            InvalidIdAppError: If the id fails ``is_valid_id``.
        """
        raise NotImplementedError

    @abstractmethod
    def is_valid_id(self, todo_id: int) -> bool:
        """Return whether the id is plausible given the current user count."""
        raise NotImplementedError

    @abstractmethod
    def user_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def todo_count(self, tenant: TenantKey) -> int:
        raise NotImplementedError

    @abstractmethod
    def stats(self) -> dict[str, Any]:
        """Return lightweight store metrics without exposing todo text."""
        raise NotImplementedError
