"""In-memory, quota-enforcing todo store.

Notes:
- Per-process only: running multiple workers gives each its own store.
- Thread-safe: one lock covers the tenant map and id allocation, so every
  check-then-mutate sequence is atomic.
- Tenants are created on their first successful add and never reaped. An
  emptied tenant still counts toward the user quota.
"""

from __future__ import annotations

import threading
from typing import Any

from todo_api.adapters.store.base import (
    DEFAULT_LIMITS,
    AbstractTodoStore,
    StoreLimits,
    TenantKey,
    Todo,
)
from todo_api.adapters.store.id_allocator import IdAllocator
from todo_api.core.errors import (
    CapacityExceededAppError,
    InvalidIdAppError,
    PayloadTooLargeAppError,
)


class InMemoryTodoStore(AbstractTodoStore):
    """Todo store keeping every tenant's todos in a process-local dict."""

    def __init__(
        self,
        *,
        limits: StoreLimits = DEFAULT_LIMITS,
        allocator: IdAllocator | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            limits: Quotas to enforce.
            allocator: Id source; a fresh allocator starting at 0 by default.
        """
        self._limits = limits
        self._allocator = allocator or IdAllocator()
        self._lock = threading.RLock()
        self._todos_by_tenant: dict[TenantKey, list[Todo]] = {}

    @property
    def limits(self) -> StoreLimits:
        return self._limits

    def _check_text(self, text: str) -> None:
        if len(text) > self._limits.max_todo_chars:
            raise PayloadTooLargeAppError(
                code="payload_too_large",
                message=f"Todo text exceeds {self._limits.max_todo_chars} characters",
                details={
                    "limit": self._limits.max_todo_chars,
                    "actual_value": len(text),
                },
            )

    def _check_id_locked(self, todo_id: int) -> None:
        if not self.is_valid_id(todo_id):
            raise InvalidIdAppError(
                code="invalid_todo_id",
                message="Todo id is out of range",
                details={"todo_id": todo_id},
            )

    def is_valid_id(self, todo_id: int) -> bool:
        """Check an id against the plausible id space.

        This is a loose bound, not an existence check: an id passes when it is
        below ``max_todos_per_user`` times the current number of users, whether
        or not such a todo exists or belongs to the caller. Callers treat a
        missing todo after this gate as a no-op.
        """
        with self._lock:
            bound = self._limits.max_todos_per_user * len(self._todos_by_tenant)
        return 0 <= todo_id < bound

    def list_todos(self, tenant: TenantKey) -> list[Todo]:
        with self._lock:
            return list(self._todos_by_tenant.get(tenant, ()))

    def add_todo(self, tenant: TenantKey, text: str) -> Todo:
        self._check_text(text)

        with self._lock:
            todos = self._todos_by_tenant.get(tenant)

            if todos is None and len(self._todos_by_tenant) >= self._limits.max_users:
                raise CapacityExceededAppError(
                    code="capacity_exceeded_users",
                    message="Maximum number of users reached",
                    details={"resource": "users", "limit": self._limits.max_users},
                )

            if todos is not None and len(todos) >= self._limits.max_todos_per_user:
                raise CapacityExceededAppError(
                    code="capacity_exceeded_todos_per_user",
                    message="Maximum number of todos for this user reached",
                    details={
                        "resource": "todos_per_user",
                        "limit": self._limits.max_todos_per_user,
                    },
                )

            # Ids are allocated only once every quota check has passed.
            todo = Todo(id=self._allocator.next_id(), text=text)
            self._todos_by_tenant.setdefault(tenant, []).append(todo)
            return todo

    def update_todo(self, tenant: TenantKey, todo_id: int, text: str) -> bool:
        self._check_text(text)

        with self._lock:
            self._check_id_locked(todo_id)
            todos = self._todos_by_tenant.get(tenant, [])
            for index, todo in enumerate(todos):
                if todo.id == todo_id:
                    todos[index] = Todo(id=todo.id, text=text)
                    return True
            return False

    def delete_todo(self, tenant: TenantKey, todo_id: int) -> bool:
        with self._lock:
            self._check_id_locked(todo_id)
            todos = self._todos_by_tenant.get(tenant)
            if not todos:
                return False
            remaining = [todo for todo in todos if todo.id != todo_id]
            if len(remaining) == len(todos):
                return False
            # Keep the (possibly empty) entry: tenants are never reaped.
            self._todos_by_tenant[tenant] = remaining
            return True

    def user_count(self) -> int:
        with self._lock:
            return len(self._todos_by_tenant)

    def todo_count(self, tenant: TenantKey) -> int:
        with self._lock:
            return len(self._todos_by_tenant.get(tenant, ()))

    def stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "users": len(self._todos_by_tenant),
                "todos": sum(len(todos) for todos in self._todos_by_tenant.values()),
                "last_issued_id": self._allocator.last_issued,
                "max_users": self._limits.max_users,
                "max_todos_per_user": self._limits.max_todos_per_user,
                "max_todo_chars": self._limits.max_todo_chars,
            }
