"""Pydantic schemas for todo requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TodoTextRequest(BaseModel):
    """Body for creating or updating a todo.

    Length is enforced by the store, which answers 413 rather than 422.
    """

    text: str = Field(..., description="Todo content (at most 1000 characters).")


class TodoResponse(BaseModel):
    """A todo owned by the calling user."""

    id: int = Field(..., ge=0, description="Globally unique todo id.")
    text: str = Field(..., description="Todo content.")


class TodoUsageResponse(BaseModel):
    """The caller's usage against the store quotas."""

    todo_count: int = Field(..., description="Todos currently owned by the caller.")
    max_todos_per_user: int = Field(..., description="Per-user todo quota.")
    max_todo_chars: int = Field(..., description="Maximum characters per todo.")
    max_users: int = Field(..., description="Maximum number of distinct users.")
