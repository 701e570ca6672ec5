"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import of ``todo_api`` so the
module-level settings instance sees them.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("APP_API_KEY_REQUIRED", "true")
os.environ.setdefault("APP_API_KEYS", "test-api-key-123,test-api-key-456")
os.environ.setdefault("LOG_LEVEL", "INFO")

import pytest
from fastapi.testclient import TestClient

from todo_api.adapters.store import InMemoryTodoStore, StoreLimits
from todo_api.api.routes.todos import get_todo_service
from todo_api.main import app
from todo_api.services.todo_service import TodoService


@pytest.fixture
def store() -> InMemoryTodoStore:
    """Fresh store with the production quotas."""
    return InMemoryTodoStore()


@pytest.fixture
def small_store() -> InMemoryTodoStore:
    """Fresh store with tiny quotas so limits are cheap to reach."""
    return InMemoryTodoStore(
        limits=StoreLimits(max_users=2, max_todos_per_user=3, max_todo_chars=5)
    )


@pytest.fixture
def valid_api_key_headers() -> dict[str, str]:
    return {"X-API-Key": "test-api-key-123"}


@pytest.fixture
def other_api_key_headers() -> dict[str, str]:
    return {"X-API-Key": "test-api-key-456"}


def _client_for(service: TodoService):
    app.dependency_overrides[get_todo_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_todo_service, None)


@pytest.fixture
def client(store: InMemoryTodoStore):
    """Test client backed by an isolated store with production quotas."""
    yield from _client_for(TodoService(store))


@pytest.fixture
def small_client(small_store: InMemoryTodoStore):
    """Test client backed by an isolated store with tiny quotas."""
    yield from _client_for(TodoService(small_store))
