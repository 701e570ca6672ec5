from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from todo_api.adapters.store.base import TenantKey
from todo_api.adapters.store.in_memory import InMemoryTodoStore
from todo_api.core.auth import resolve_caller, verify_api_key
from todo_api.schemas.todo import TodoResponse, TodoTextRequest, TodoUsageResponse
from todo_api.services.todo_service import TodoService

router = APIRouter(tags=["Todos"], dependencies=[Depends(verify_api_key)])

# Process-wide store shared by every request
_todo_service = TodoService(store=InMemoryTodoStore())


def get_todo_service() -> TodoService:
    """Return the process-wide todo service (overridable in tests)."""
    return _todo_service


TodoId = Annotated[int, Path(description="Id of a todo owned by the caller.")]


@router.get("/todos", response_model=list[TodoResponse])
async def list_todos(
    caller: TenantKey = Depends(resolve_caller),
    service: TodoService = Depends(get_todo_service),
) -> list[TodoResponse]:
    """List the caller's todos in creation order."""
    return service.list_todos(caller)


@router.post(
    "/todos",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_todo(
    body: TodoTextRequest,
    caller: TenantKey = Depends(resolve_caller),
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Create a todo for the caller.

    Errors:
        413 when the text is too long, 409 when the user or per-user quota
        is exhausted.
    """
    return service.add_todo(caller, body.text)


@router.get("/todos/usage", response_model=TodoUsageResponse)
async def todo_usage(
    caller: TenantKey = Depends(resolve_caller),
    service: TodoService = Depends(get_todo_service),
) -> TodoUsageResponse:
    """Report the caller's todo count against the store quotas."""
    return service.usage(caller)


@router.put("/todos/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_todo(
    body: TodoTextRequest,
    todo_id: TodoId,
    caller: TenantKey = Depends(resolve_caller),
    service: TodoService = Depends(get_todo_service),
) -> Response:
    """Replace a todo's text.

    Ids the caller does not own are ignored. Errors: 413 when the text is
    too long, 400 when the id is out of range.
    """
    service.update_todo(caller, todo_id, body.text)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/todos/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(
    todo_id: TodoId,
    caller: TenantKey = Depends(resolve_caller),
    service: TodoService = Depends(get_todo_service),
) -> Response:
    """Delete a todo. Ids the caller does not own are ignored (400 if out of range)."""
    service.delete_todo(caller, todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
