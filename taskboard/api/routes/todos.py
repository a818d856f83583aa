"""Todo Routes — todos, their status/assignee patches and their comments.

Invariants:
    - Every route requires a valid token; no role check beyond that
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_current_claims
from taskboard.api.envelope import ok, ok_row, ok_rows
from taskboard.infrastructure.database import get_db
from taskboard.schemas.requests import (
    CommentCreate, TodoAssigneePatch, TodoPayload, TodoStatusPatch,
)
from taskboard.schemas.responses import CommentView, TodoView
from taskboard.services.handle_comments import CommentHandlers
from taskboard.services.handle_todos import TodoHandlers

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
    dependencies=[Depends(get_current_claims)],
)


def _handlers(db: AsyncSession = Depends(get_db)) -> TodoHandlers:
    return TodoHandlers(db)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_todo(body: TodoPayload, todos: TodoHandlers = Depends(_handlers)):
    return ok_row(TodoView, await todos.create(body))


@router.get("")
async def list_todos(todos: TodoHandlers = Depends(_handlers)):
    return ok_rows(TodoView, await todos.list_all())


@router.get("/{todo_id}")
async def get_todo(todo_id: UUID, todos: TodoHandlers = Depends(_handlers)):
    return ok_row(TodoView, await todos.get(todo_id))


@router.put("/{todo_id}")
async def update_todo(
    todo_id: UUID, body: TodoPayload, todos: TodoHandlers = Depends(_handlers),
):
    return ok_row(TodoView, await todos.update(todo_id, body))


@router.delete("/{todo_id}")
async def delete_todo(todo_id: UUID, todos: TodoHandlers = Depends(_handlers)):
    await todos.delete(todo_id)
    return ok()


@router.patch("/{todo_id}/status")
async def update_todo_status(
    todo_id: UUID, body: TodoStatusPatch, todos: TodoHandlers = Depends(_handlers),
):
    return ok_row(TodoView, await todos.set_status(todo_id, body))


@router.patch("/{todo_id}/assign")
async def update_todo_assignee(
    todo_id: UUID, body: TodoAssigneePatch, todos: TodoHandlers = Depends(_handlers),
):
    return ok_row(TodoView, await todos.assign(todo_id, body))


@router.get("/{todo_id}/comments")
async def get_todo_comments(todo_id: UUID, todos: TodoHandlers = Depends(_handlers)):
    return ok_rows(CommentView, await todos.comments(todo_id))


@router.post("/{todo_id}/comments", status_code=status.HTTP_201_CREATED)
async def create_todo_comment(
    todo_id: UUID, body: CommentCreate, db: AsyncSession = Depends(get_db),
):
    comment = await CommentHandlers(db).create(body, todo_id)
    return ok_row(CommentView, comment)
