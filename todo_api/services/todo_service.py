"""Todo service exposing the store to resolved callers.

The store owns every invariant and raises the domain errors. This layer
shapes results into response schemas and records what happened, logging the
tenant only as a short hash.
"""

from __future__ import annotations

import logging

from todo_api.adapters.store.base import AbstractTodoStore, TenantKey
from todo_api.core.errors import AppError
from todo_api.schemas.todo import TodoResponse, TodoUsageResponse

logger = logging.getLogger(__name__)


def tenant_hash(tenant: TenantKey) -> str:
    """Short, log-safe fingerprint of a tenant key."""
    return tenant.hex()[:16]


class TodoService:
    """Caller-facing operations over an ``AbstractTodoStore``."""

    def __init__(self, store: AbstractTodoStore) -> None:
        self._store = store

    @property
    def store(self) -> AbstractTodoStore:
        return self._store

    def list_todos(self, tenant: TenantKey) -> list[TodoResponse]:
        todos = self._store.list_todos(tenant)
        logger.debug(
            "todo.listed",
            extra={"tenant_hash": tenant_hash(tenant), "count": len(todos)},
        )
        return [TodoResponse(id=todo.id, text=todo.text) for todo in todos]

    def add_todo(self, tenant: TenantKey, text: str) -> TodoResponse:
        """Create a todo for the caller.

        Raises:
            PayloadTooLargeAppError: Text exceeds the character limit.
            CapacityExceededAppError: User or per-user quota is full.
        """
        try:
            todo = self._store.add_todo(tenant, text)
        except AppError as exc:
            self._log_rejected("add", tenant, exc)
            raise

        logger.info(
            "todo.added",
            extra={
                "tenant_hash": tenant_hash(tenant),
                "todo_id": todo.id,
                "char_count": len(text),
            },
        )
        return TodoResponse(id=todo.id, text=todo.text)

    def update_todo(self, tenant: TenantKey, todo_id: int, text: str) -> None:
        """Replace a todo's text; unknown ids that pass the id gate are ignored.

        Raises:
            PayloadTooLargeAppError: Text exceeds the character limit.
            InvalidIdAppError: Id is outside the plausible id space.
        """
        try:
            updated = self._store.update_todo(tenant, todo_id, text)
        except AppError as exc:
            self._log_rejected("update", tenant, exc)
            raise

        logger.info(
            "todo.updated" if updated else "todo.update_noop",
            extra={"tenant_hash": tenant_hash(tenant), "todo_id": todo_id},
        )

    def delete_todo(self, tenant: TenantKey, todo_id: int) -> None:
        """Delete a todo; unknown ids that pass the id gate are ignored.

        Raises:
            InvalidIdAppError: Id is outside the plausible id space.
        """
        try:
            deleted = self._store.delete_todo(tenant, todo_id)
        except AppError as exc:
            self._log_rejected("delete", tenant, exc)
            raise

        logger.info(
            "todo.deleted" if deleted else "todo.delete_noop",
            extra={"tenant_hash": tenant_hash(tenant), "todo_id": todo_id},
        )

    def usage(self, tenant: TenantKey) -> TodoUsageResponse:
        limits = self._store.limits
        return TodoUsageResponse(
            todo_count=self._store.todo_count(tenant),
            max_todos_per_user=limits.max_todos_per_user,
            max_todo_chars=limits.max_todo_chars,
            max_users=limits.max_users,
        )

    def _log_rejected(self, operation: str, tenant: TenantKey, exc: AppError) -> None:
        logger.info(
            "todo.rejected",
            extra={
                "operation": operation,
                "tenant_hash": tenant_hash(tenant),
                "error_code": exc.code,
            },
        )
