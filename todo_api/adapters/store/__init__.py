"""Todo storage adapters.

The service depends on ``AbstractTodoStore`` so the in-memory store can be
replaced by a shared backend without touching the HTTP layer.
"""

from __future__ import annotations

from todo_api.adapters.store.base import (
    DEFAULT_LIMITS,
    MAX_TODO_CHARS,
    MAX_TODOS_PER_USER,
    MAX_USERS,
    AbstractTodoStore,
    StoreLimits,
    TenantKey,
    Todo,
)
from todo_api.adapters.store.id_allocator import IdAllocator
from todo_api.adapters.store.in_memory import InMemoryTodoStore

__all__ = [
    "DEFAULT_LIMITS",
    "MAX_TODO_CHARS",
    "MAX_TODOS_PER_USER",
    "MAX_USERS",
    "AbstractTodoStore",
    "IdAllocator",
    "InMemoryTodoStore",
    "StoreLimits",
    "TenantKey",
    "Todo",
]
