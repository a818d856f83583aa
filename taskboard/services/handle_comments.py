"""Comment Handlers — comments on todos.

Invariants:
    - Create checks: content/todo/user present (400) → user exists (404) →
      todo exists (404)
    - Under /todos/{id}/comments the path id wins; a differing body todoId
      is rejected with 400 before any lookup
    - Comments are removed with their todo or their author (DB cascade)
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.enforce_payloads import check_comment_create, check_comment_update
from taskboard.core.errors import bad_request, not_found
from taskboard.infrastructure.entity_store import EntityStores
from taskboard.models import Comment
from taskboard.schemas.requests import CommentCreate, CommentUpdate
from taskboard.services.integrity import IntegrityCoordinator

logger = logging.getLogger(__name__)

TODO_MISMATCH_MESSAGE = "Todo ID does not match the todo in the path"


class CommentHandlers:
    """Comment operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.stores = EntityStores(db)
        self.integrity = IntegrityCoordinator(self.stores)

    async def create(
        self, payload: CommentCreate, todo_id: UUID | None = None,
    ) -> Comment:
        """Create a comment; under a todo path the body todoId must agree with it."""
        if todo_id is not None and payload.todo_id not in (None, todo_id):
            raise bad_request(TODO_MISMATCH_MESSAGE)
        todo_id = todo_id or payload.todo_id
        check_comment_create(payload.content, todo_id, payload.user_id)
        await self.integrity.check_comment_create(payload.user_id, todo_id)
        comment = await self.stores.comments.create(
            content=payload.content, todo_id=todo_id, user_id=payload.user_id,
        )
        await self.db.commit()
        logger.info(
            "Comment created", extra={"entity": "comment", "entity_id": str(comment.id)},
        )
        return comment

    async def list_all(self) -> list[Comment]:
        return await self.stores.comments.list_all()

    async def get(self, comment_id: UUID) -> Comment:
        return await self.integrity.require_comment(comment_id)

    async def update(self, comment_id: UUID, payload: CommentUpdate) -> Comment:
        check_comment_update(payload.content)
        comment = await self.stores.comments.update(
            comment_id, {"content": payload.content},
        )
        if comment is None:
            raise not_found("Comment not found")
        await self.db.commit()
        return comment

    async def delete(self, comment_id: UUID) -> None:
        removed = await self.stores.comments.delete_by_id(comment_id)
        if not removed:
            raise not_found("Comment not found")
        await self.db.commit()
