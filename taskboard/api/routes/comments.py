"""Comment Routes — read, edit and delete comments (creation lives under /todos).

Invariants:
    - Every route requires a valid token; no role check beyond that
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_current_claims
from taskboard.api.envelope import ok, ok_row, ok_rows
from taskboard.infrastructure.database import get_db
from taskboard.schemas.requests import CommentUpdate
from taskboard.schemas.responses import CommentView
from taskboard.services.handle_comments import CommentHandlers

router = APIRouter(
    prefix="/api/v1/comments",
    tags=["comments"],
    dependencies=[Depends(get_current_claims)],
)


def _handlers(db: AsyncSession = Depends(get_db)) -> CommentHandlers:
    return CommentHandlers(db)


@router.get("")
async def list_comments(comments: CommentHandlers = Depends(_handlers)):
    return ok_rows(CommentView, await comments.list_all())


@router.get("/{comment_id}")
async def get_comment(
    comment_id: UUID, comments: CommentHandlers = Depends(_handlers),
):
    return ok_row(CommentView, await comments.get(comment_id))


@router.put("/{comment_id}")
async def update_comment(
    comment_id: UUID,
    body: CommentUpdate,
    comments: CommentHandlers = Depends(_handlers),
):
    return ok_row(CommentView, await comments.update(comment_id, body))


@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: UUID, comments: CommentHandlers = Depends(_handlers),
):
    await comments.delete(comment_id)
    return ok()
