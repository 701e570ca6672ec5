from __future__ import annotations

from todo_api.api.routes.health import router as health_router
from todo_api.api.routes.todos import router as todos_router

__all__ = ["health_router", "todos_router"]
