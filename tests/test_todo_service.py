"""Tests for the todo service: schema shaping and structured logging."""

import logging

import pytest

from todo_api.adapters.store import InMemoryTodoStore
from todo_api.core.errors import CapacityExceededAppError, InvalidIdAppError
from todo_api.schemas.todo import TodoResponse
from todo_api.services.todo_service import TodoService, tenant_hash

ALICE = bytes.fromhex("a1" * 32)
SERVICE_LOGGER = "todo_api.services.todo_service"


@pytest.fixture
def service(small_store: InMemoryTodoStore) -> TodoService:
    return TodoService(small_store)


def _events(caplog: pytest.LogCaptureFixture) -> list[str]:
    return [r.getMessage() for r in caplog.records if r.name == SERVICE_LOGGER]


def test_tenant_hash_is_short_hex() -> None:
    assert tenant_hash(ALICE) == "a1" * 8


def test_add_and_list_return_schemas(service: TodoService) -> None:
    created = service.add_todo(ALICE, "milk")

    assert created == TodoResponse(id=1, text="milk")
    assert service.list_todos(ALICE) == [created]


def test_add_logs_without_text(service: TodoService, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger=SERVICE_LOGGER)

    service.add_todo(ALICE, "milk")

    record = next(r for r in caplog.records if r.getMessage() == "todo.added")
    assert record.tenant_hash == tenant_hash(ALICE)
    assert record.todo_id == 1
    assert record.char_count == 4
    assert not hasattr(record, "text")


def test_rejection_is_logged_and_reraised(
    service: TodoService, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger=SERVICE_LOGGER)
    for _ in range(3):
        service.add_todo(ALICE, "t")

    with pytest.raises(CapacityExceededAppError):
        service.add_todo(ALICE, "t")

    record = next(r for r in caplog.records if r.getMessage() == "todo.rejected")
    assert record.operation == "add"
    assert record.error_code == "capacity_exceeded_todos_per_user"


def test_update_and_delete_log_noops(
    service: TodoService, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger=SERVICE_LOGGER)
    todo = service.add_todo(ALICE, "a")

    service.update_todo(ALICE, todo.id, "b")
    service.update_todo(ALICE, 2, "c")
    service.delete_todo(ALICE, todo.id)
    service.delete_todo(ALICE, todo.id)

    assert _events(caplog)[-4:] == [
        "todo.updated",
        "todo.update_noop",
        "todo.deleted",
        "todo.delete_noop",
    ]
    assert service.list_todos(ALICE) == []


def test_invalid_id_propagates(service: TodoService) -> None:
    with pytest.raises(InvalidIdAppError):
        service.delete_todo(ALICE, 1)


def test_usage(service: TodoService) -> None:
    service.add_todo(ALICE, "a")

    usage = service.usage(ALICE)

    assert usage.todo_count == 1
    assert usage.max_todos_per_user == 3
    assert usage.max_todo_chars == 5
    assert usage.max_users == 2
