"""Todo Handlers — todo CRUD, status/assignee patches, and comment listing.

Invariants:
    - Create/update: payload rules (incl. strictly-future due date) → todo
      exists (update only, 404) → project exists (404)
    - Assignee patch: assignee exists (404) → todo exists (404)
    - Status patch only accepts pending, in_progress, done
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.enforce_payloads import (
    check_todo, check_todo_assignee, check_todo_status,
)
from taskboard.core.errors import not_found
from taskboard.infrastructure.entity_store import EntityStores
from taskboard.models import Comment, Todo
from taskboard.schemas.requests import TodoAssigneePatch, TodoPayload, TodoStatusPatch
from taskboard.services.integrity import IntegrityCoordinator

logger = logging.getLogger(__name__)


class TodoHandlers:
    """Todo operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.stores = EntityStores(db)
        self.integrity = IntegrityCoordinator(self.stores)

    async def create(self, payload: TodoPayload) -> Todo:
        due_date = check_todo(
            payload.title, payload.description, payload.due_date, payload.project_id,
        )
        await self.integrity.check_todo_write(payload.project_id)
        todo = await self.stores.todos.create(
            title=payload.title,
            description=payload.description,
            due_date=due_date,
            project_id=payload.project_id,
        )
        await self.db.commit()
        logger.info(
            "Todo created", extra={"entity": "todo", "entity_id": str(todo.id)},
        )
        return todo

    async def list_all(self) -> list[Todo]:
        return await self.stores.todos.list_all()

    async def get(self, todo_id: UUID) -> Todo:
        return await self.integrity.require_todo(todo_id)

    async def update(self, todo_id: UUID, payload: TodoPayload) -> Todo:
        due_date = check_todo(
            payload.title, payload.description, payload.due_date, payload.project_id,
        )
        await self.integrity.check_todo_write(payload.project_id, todo_id)
        return await self._apply(todo_id, {
            "title": payload.title,
            "description": payload.description,
            "due_date": due_date,
            "project_id": payload.project_id,
        })

    async def set_status(self, todo_id: UUID, payload: TodoStatusPatch) -> Todo:
        status = check_todo_status(payload.status)
        return await self._apply(todo_id, {"status": status.value})

    async def assign(self, todo_id: UUID, payload: TodoAssigneePatch) -> Todo:
        check_todo_assignee(payload.assigned_user_id)
        await self.integrity.check_todo_assignee(payload.assigned_user_id, todo_id)
        return await self._apply(
            todo_id, {"assigned_user_id": payload.assigned_user_id},
        )

    async def delete(self, todo_id: UUID) -> None:
        """Comments cascade with the todo."""
        removed = await self.stores.todos.delete_by_id(todo_id)
        if not removed:
            raise not_found("Todo not found")
        await self.db.commit()

    async def comments(self, todo_id: UUID) -> list[Comment]:
        await self.integrity.require_todo(todo_id)
        return await self.stores.comments_of_todo(todo_id)

    async def _apply(self, todo_id: UUID, values: dict) -> Todo:
        todo = await self.stores.todos.update(todo_id, values)
        if todo is None:
            raise not_found("Todo not found")
        await self.db.commit()
        return todo
