"""Integrity Coordinator — ordered existence/uniqueness checks before each mutation.

Invariants:
    - Runs only after payload validation has passed
    - Each operation checks its preconditions in a fixed order; first failure wins
    - Each check is a single lookup against the entity store
    - Never retries and never writes; the handler performs the write afterwards

Design Decisions:
    - Pre-checks give the stable error message; the matching unique constraint
      (see unique_write) closes the check-then-act race with the same message
    - Project create/update report a missing organization as BadRequest, user
      flows report it as NotFound; both shapes are part of the public contract
"""

import logging
from typing import TypeVar
from uuid import UUID

from taskboard.core.errors import bad_request, not_found
from taskboard.core.repository_protocols import EntityStoreLike
from taskboard.infrastructure.entity_store import EntityStores
from taskboard.models import Comment, Organization, Project, Todo, User

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "User with the same email already exists"
PROJECT_NAME_TAKEN_MESSAGE = "Project with same name already exists"
ALREADY_MEMBER_MESSAGE = "User is already a member of the project"
ORGANIZATION_MISSING_MESSAGE = "Organization does not exist"

RowT = TypeVar("RowT")


class IntegrityCoordinator:
    """Relational precondition checks shared by all entity handlers."""

    def __init__(self, stores: EntityStores):
        self.stores = stores

    # ─── Single-entity existence ────────────────────────────────

    @staticmethod
    async def _require(store: EntityStoreLike[RowT], row_id: UUID, label: str) -> RowT:
        row = await store.get_by_id(row_id)
        if row is None:
            raise not_found(f"{label} not found")
        return row

    async def require_organization(self, organization_id: UUID) -> Organization:
        return await self._require(
            self.stores.organizations, organization_id, "Organization",
        )

    async def require_user(self, user_id: UUID) -> User:
        return await self._require(self.stores.users, user_id, "User")

    async def require_project(self, project_id: UUID) -> Project:
        return await self._require(self.stores.projects, project_id, "Project")

    async def require_todo(self, todo_id: UUID) -> Todo:
        return await self._require(self.stores.todos, todo_id, "Todo")

    async def require_comment(self, comment_id: UUID) -> Comment:
        return await self._require(self.stores.comments, comment_id, "Comment")

    # ─── Users ──────────────────────────────────────────────────

    async def check_user_create(self, email: str, organization_id: UUID) -> None:
        """Email unused → organization exists."""
        if await self.stores.users.get_by_field("email", email) is not None:
            raise bad_request(EMAIL_TAKEN_MESSAGE)
        await self.require_organization(organization_id)

    async def check_user_update(
        self, user_id: UUID, email: str, organization_id: UUID,
    ) -> User:
        """User exists → organization exists → email not held by someone else."""
        user = await self.require_user(user_id)
        await self.require_organization(organization_id)
        holder = await self.stores.users.get_by_field("email", email)
        if holder is not None and holder.id != user.id:
            raise bad_request(EMAIL_TAKEN_MESSAGE)
        return user

    # ─── Projects ───────────────────────────────────────────────

    async def _require_project_organization(self, organization_id: UUID) -> None:
        if not await self.stores.organizations.exists(organization_id):
            raise bad_request(ORGANIZATION_MISSING_MESSAGE)

    async def check_project_create(self, name: str, organization_id: UUID) -> None:
        """Organization exists → name unused."""
        await self._require_project_organization(organization_id)
        if await self.stores.projects.get_by_field("name", name) is not None:
            raise bad_request(PROJECT_NAME_TAKEN_MESSAGE)

    async def check_project_update(
        self, project_id: UUID, name: str, organization_id: UUID,
    ) -> Project:
        """Project exists → organization exists → name not held by another project."""
        project = await self.require_project(project_id)
        await self._require_project_organization(organization_id)
        holder = await self.stores.projects.get_by_field("name", name)
        if holder is not None and holder.id != project.id:
            raise bad_request(PROJECT_NAME_TAKEN_MESSAGE)
        return project

    async def check_membership_create(self, project_id: UUID, user_id: UUID) -> None:
        """Project exists → user exists → not already a member."""
        await self.require_project(project_id)
        await self.require_user(user_id)
        if await self.stores.get_membership(project_id, user_id) is not None:
            raise bad_request(ALREADY_MEMBER_MESSAGE)

    # ─── Todos & comments ───────────────────────────────────────

    async def check_todo_write(
        self, project_id: UUID, todo_id: UUID | None = None,
    ) -> None:
        """(Update) todo exists → project exists."""
        if todo_id is not None:
            await self.require_todo(todo_id)
        await self.require_project(project_id)

    async def check_todo_assignee(self, assigned_user_id: UUID, todo_id: UUID) -> None:
        """Assignee exists → todo exists."""
        await self.require_user(assigned_user_id)
        await self.require_todo(todo_id)

    async def check_comment_create(self, user_id: UUID, todo_id: UUID) -> None:
        """User exists → todo exists."""
        await self.require_user(user_id)
        await self.require_todo(todo_id)
