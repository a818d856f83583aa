"""Project Handlers — project CRUD, listings, and membership management.

Invariants:
    - Create checks: organization exists (400) → name unused (400)
    - Membership create checks: project (404) → user (404) → not a member (400)
    - uq_projects_name and uq_project_users_pair back the pre-checks; a
      concurrent duplicate fails with the same BadRequest as the pre-check
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.enforce_payloads import check_membership, check_project
from taskboard.core.errors import not_found
from taskboard.infrastructure.entity_store import EntityStores, unique_write
from taskboard.models import Project, ProjectUser, Todo, User
from taskboard.schemas.requests import MembershipCreate, ProjectPayload
from taskboard.services.integrity import (
    ALREADY_MEMBER_MESSAGE, PROJECT_NAME_TAKEN_MESSAGE, IntegrityCoordinator,
)

logger = logging.getLogger(__name__)


class ProjectHandlers:
    """Project and membership operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.stores = EntityStores(db)
        self.integrity = IntegrityCoordinator(self.stores)

    async def create(self, payload: ProjectPayload) -> Project:
        check_project(payload.name, payload.description, payload.organization_id)
        await self.integrity.check_project_create(
            payload.name, payload.organization_id,
        )
        async with unique_write(self.db, PROJECT_NAME_TAKEN_MESSAGE):
            project = await self.stores.projects.create(
                name=payload.name,
                description=payload.description,
                organization_id=payload.organization_id,
            )
        await self.db.commit()
        logger.info(
            "Project created", extra={"entity": "project", "entity_id": str(project.id)},
        )
        return project

    async def list_all(self) -> list[Project]:
        return await self.stores.projects.list_all()

    async def get(self, project_id: UUID) -> Project:
        return await self.integrity.require_project(project_id)

    async def update(self, project_id: UUID, payload: ProjectPayload) -> Project:
        check_project(payload.name, payload.description, payload.organization_id)
        await self.integrity.check_project_update(
            project_id, payload.name, payload.organization_id,
        )
        async with unique_write(self.db, PROJECT_NAME_TAKEN_MESSAGE):
            project = await self.stores.projects.update(project_id, {
                "name": payload.name,
                "description": payload.description,
                "organization_id": payload.organization_id,
            })
        if project is None:
            raise not_found("Project not found")
        await self.db.commit()
        return project

    async def delete(self, project_id: UUID) -> None:
        """Todos and memberships cascade with the project."""
        removed = await self.stores.projects.delete_by_id(project_id)
        if not removed:
            raise not_found("Project not found")
        await self.db.commit()
        logger.info(
            "Project deleted", extra={"entity": "project", "entity_id": str(project_id)},
        )

    async def users(self, project_id: UUID) -> list[User]:
        await self.integrity.require_project(project_id)
        return await self.stores.users_of_project(project_id)

    async def todos(self, project_id: UUID) -> list[Todo]:
        await self.integrity.require_project(project_id)
        return await self.stores.todos_of_project(project_id)

    # ─── Memberships ────────────────────────────────────────────

    async def add_member(
        self, project_id: UUID, payload: MembershipCreate,
    ) -> ProjectUser:
        check_membership(payload.user_id)
        await self.integrity.check_membership_create(project_id, payload.user_id)
        async with unique_write(self.db, ALREADY_MEMBER_MESSAGE):
            membership = await self.stores.memberships.create(
                project_id=project_id, user_id=payload.user_id,
            )
        await self.db.commit()
        logger.info(
            "Project member added",
            extra={"entity": "project_user", "entity_id": str(membership.id)},
        )
        return membership

    async def remove_member(self, project_id: UUID, user_id: UUID) -> None:
        removed = await self.stores.delete_membership(project_id, user_id)
        if not removed:
            raise not_found("User is not a member of the project")
        await self.db.commit()
