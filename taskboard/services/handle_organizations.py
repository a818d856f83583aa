"""Organization Handlers — admin-only CRUD plus org-scoped listings.

Invariants:
    - Name rules checked before any store access
    - Listing an org's users/projects first proves the org exists, so "no such
      organization" (404) is distinct from "organization with no children" ([])
    - Deleting an organization cascades to its users and projects in the database
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.enforce_payloads import check_organization
from taskboard.core.errors import not_found
from taskboard.infrastructure.entity_store import EntityStores
from taskboard.models import Organization, Project, User
from taskboard.schemas.requests import OrganizationPayload
from taskboard.services.integrity import IntegrityCoordinator

logger = logging.getLogger(__name__)


class OrganizationHandlers:
    """Organization operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.stores = EntityStores(db)
        self.integrity = IntegrityCoordinator(self.stores)

    async def create(self, payload: OrganizationPayload) -> Organization:
        check_organization(payload.name)
        organization = await self.stores.organizations.create(name=payload.name)
        await self.db.commit()
        logger.info(
            "Organization created",
            extra={"entity": "organization", "entity_id": str(organization.id)},
        )
        return organization

    async def list_all(self, name: str | None = None) -> list[Organization]:
        if name:
            return await self.stores.organizations.list_where(name=name)
        return await self.stores.organizations.list_all()

    async def get(self, organization_id: UUID) -> Organization:
        return await self.integrity.require_organization(organization_id)

    async def update(
        self, organization_id: UUID, payload: OrganizationPayload,
    ) -> Organization:
        check_organization(payload.name)
        organization = await self.stores.organizations.update(
            organization_id, {"name": payload.name},
        )
        if organization is None:
            raise not_found("Organization not found")
        await self.db.commit()
        return organization

    async def delete(self, organization_id: UUID) -> None:
        removed = await self.stores.organizations.delete_by_id(organization_id)
        if not removed:
            raise not_found("Organization not found")
        await self.db.commit()
        logger.info(
            "Organization deleted",
            extra={"entity": "organization", "entity_id": str(organization_id)},
        )

    async def users(self, organization_id: UUID) -> list[User]:
        await self.integrity.require_organization(organization_id)
        return await self.stores.users_of_organization(organization_id)

    async def projects(self, organization_id: UUID) -> list[Project]:
        await self.integrity.require_organization(organization_id)
        return await self.stores.projects_of_organization(organization_id)
