"""Entity Store — thin SQLAlchemy adapter for per-entity CRUD and relationship lookups.

Invariants:
    - get_by_id / get_by_field return one row or None for every entity
    - Deletes are Core DELETE statements; the database applies ON DELETE rules
    - Unique-constraint violations inside unique_write() become the caller's
      BadRequest; any other IntegrityError propagates unchanged
    - No commits here: the handler owns the transaction boundary

Design Decisions:
    - Always SELECT (never session.get): identity-map hits would resurrect rows
      the database already cascaded away
    - Relationship lookups live on EntityStores so handlers need one object
    - Unique violations are recognised by SQLSTATE 23505 or the sqlite3 error
      name; a foreign-key IntegrityError never reads as a duplicate
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.errors import bad_request
from taskboard.db.base import Base
from taskboard.models import (
    Comment, Organization, Project, ProjectUser, Todo, User,
)

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=Base)

UNIQUE_VIOLATION_SQLSTATE = "23505"
SQLITE_UNIQUE_ERRORS = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"})


def is_unique_violation(error: IntegrityError) -> bool:
    """True for duplicate-key errors.

    PostgreSQL drivers expose the SQLSTATE; sqlite3 exposes an error name.
    Message text is only consulted when the driver offers neither.
    """
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    errorname = getattr(orig, "sqlite_errorname", None)
    if errorname:
        return errorname in SQLITE_UNIQUE_ERRORS
    message = str(orig).lower()
    return "unique" in message or "duplicate key" in message


@asynccontextmanager
async def unique_write(db: AsyncSession, conflict_message: str) -> AsyncIterator[None]:
    """Translate a unique-constraint violation raised by the wrapped flush into BadRequest."""
    try:
        yield
    except IntegrityError as e:
        if not is_unique_violation(e):
            raise
        await db.rollback()
        logger.warning(f"Unique constraint rejected write: {conflict_message}")
        raise bad_request(conflict_message)


class EntityStore(Generic[RowT]):
    """CRUD for a single ORM model."""

    def __init__(self, db: AsyncSession, model: type[RowT]):
        self.db = db
        self.model = model

    async def create(self, **values: Any) -> RowT:
        row = self.model(**values)
        self.db.add(row)
        await self.db.flush()
        return row

    async def get_by_id(self, row_id: UUID) -> RowT | None:
        result = await self.db.execute(
            select(self.model).where(self.model.id == row_id),
        )
        return result.scalar_one_or_none()

    async def get_by_field(self, field: str, value: Any) -> RowT | None:
        result = await self.db.execute(
            select(self.model)
            .where(getattr(self.model, field) == value)
            .order_by(self.model.created_at)
            .limit(1),
        )
        return result.scalars().first()

    async def exists(self, row_id: UUID) -> bool:
        result = await self.db.execute(
            select(exists().where(self.model.id == row_id)),
        )
        return bool(result.scalar())

    async def update(self, row_id: UUID, values: dict[str, Any]) -> RowT | None:
        row = await self.get_by_id(row_id)
        if row is None:
            return None
        for field, value in values.items():
            setattr(row, field, value)
        await self.db.flush()
        return row

    async def delete_by_id(self, row_id: UUID) -> int:
        result = await self.db.execute(
            delete(self.model).where(self.model.id == row_id),
        )
        return result.rowcount or 0

    async def list_all(self) -> list[RowT]:
        result = await self.db.execute(
            select(self.model).order_by(self.model.created_at),
        )
        return list(result.scalars().all())

    async def list_where(self, **filters: Any) -> list[RowT]:
        query = select(self.model).order_by(self.model.created_at)
        for field, value in filters.items():
            query = query.where(getattr(self.model, field) == value)
        result = await self.db.execute(query)
        return list(result.scalars().all())


class EntityStores:
    """All entity stores for one DB session, plus cross-entity lookups."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.organizations = EntityStore(db, Organization)
        self.users = EntityStore(db, User)
        self.projects = EntityStore(db, Project)
        self.memberships = EntityStore(db, ProjectUser)
        self.todos = EntityStore(db, Todo)
        self.comments = EntityStore(db, Comment)

    # ─── Memberships ────────────────────────────────────────────

    async def get_membership(
        self, project_id: UUID, user_id: UUID,
    ) -> ProjectUser | None:
        result = await self.db.execute(
            select(ProjectUser)
            .where(ProjectUser.project_id == project_id)
            .where(ProjectUser.user_id == user_id),
        )
        return result.scalar_one_or_none()

    async def delete_membership(self, project_id: UUID, user_id: UUID) -> int:
        result = await self.db.execute(
            delete(ProjectUser)
            .where(ProjectUser.project_id == project_id)
            .where(ProjectUser.user_id == user_id),
        )
        return result.rowcount or 0

    # ─── Relationship lookups ───────────────────────────────────

    async def users_of_organization(self, organization_id: UUID) -> list[User]:
        return await self.users.list_where(organization_id=organization_id)

    async def projects_of_organization(self, organization_id: UUID) -> list[Project]:
        return await self.projects.list_where(organization_id=organization_id)

    async def users_of_project(self, project_id: UUID) -> list[User]:
        result = await self.db.execute(
            select(User)
            .join(ProjectUser, ProjectUser.user_id == User.id)
            .where(ProjectUser.project_id == project_id)
            .order_by(ProjectUser.created_at),
        )
        return list(result.scalars().all())

    async def todos_of_project(self, project_id: UUID) -> list[Todo]:
        return await self.todos.list_where(project_id=project_id)

    async def projects_of_user(self, user_id: UUID) -> list[Project]:
        result = await self.db.execute(
            select(Project)
            .join(ProjectUser, ProjectUser.project_id == Project.id)
            .where(ProjectUser.user_id == user_id)
            .order_by(ProjectUser.created_at),
        )
        return list(result.scalars().all())

    async def todos_of_user(self, user_id: UUID) -> list[Todo]:
        return await self.todos.list_where(assigned_user_id=user_id)

    async def comments_of_todo(self, todo_id: UUID) -> list[Comment]:
        return await self.comments.list_where(todo_id=todo_id)
