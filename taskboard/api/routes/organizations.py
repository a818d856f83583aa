"""Organization Routes — admin-only organization management.

Invariants:
    - Every route depends on require_admin: no token → 401 "Authorization token
      required", non-admin token → 401 "Admin access required"
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import require_admin
from taskboard.api.envelope import ok, ok_row, ok_rows
from taskboard.infrastructure.database import get_db
from taskboard.schemas.requests import OrganizationPayload
from taskboard.schemas.responses import OrganizationView, ProjectView, UserView
from taskboard.services.handle_organizations import OrganizationHandlers

router = APIRouter(
    prefix="/api/v1/organizations",
    tags=["organizations"],
    dependencies=[Depends(require_admin)],
)


def _handlers(db: AsyncSession = Depends(get_db)) -> OrganizationHandlers:
    return OrganizationHandlers(db)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_organization(
    body: OrganizationPayload, orgs: OrganizationHandlers = Depends(_handlers),
):
    return ok_row(OrganizationView, await orgs.create(body))


@router.get("")
async def list_organizations(
    name: str | None = Query(None),
    orgs: OrganizationHandlers = Depends(_handlers),
):
    """List organizations, optionally filtered by exact name."""
    return ok_rows(OrganizationView, await orgs.list_all(name))


@router.get("/{organization_id}")
async def get_organization(
    organization_id: UUID, orgs: OrganizationHandlers = Depends(_handlers),
):
    return ok_row(OrganizationView, await orgs.get(organization_id))


@router.put("/{organization_id}")
async def update_organization(
    organization_id: UUID,
    body: OrganizationPayload,
    orgs: OrganizationHandlers = Depends(_handlers),
):
    return ok_row(OrganizationView, await orgs.update(organization_id, body))


@router.delete("/{organization_id}")
async def delete_organization(
    organization_id: UUID, orgs: OrganizationHandlers = Depends(_handlers),
):
    """Delete an organization together with its users and projects."""
    await orgs.delete(organization_id)
    return ok()


@router.get("/{organization_id}/users")
async def get_organization_users(
    organization_id: UUID, orgs: OrganizationHandlers = Depends(_handlers),
):
    return ok_rows(UserView, await orgs.users(organization_id))


@router.get("/{organization_id}/projects")
async def get_organization_projects(
    organization_id: UUID, orgs: OrganizationHandlers = Depends(_handlers),
):
    return ok_rows(ProjectView, await orgs.projects(organization_id))
