"""Project Routes — projects, their members and their todos.

Invariants:
    - Every route requires a valid token; no role check beyond that
    - Membership create answers 201 with the new membership row
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_current_claims
from taskboard.api.envelope import ok, ok_row, ok_rows
from taskboard.infrastructure.database import get_db
from taskboard.schemas.requests import MembershipCreate, ProjectPayload
from taskboard.schemas.responses import (
    MembershipView, ProjectView, TodoView, UserView,
)
from taskboard.services.handle_projects import ProjectHandlers

router = APIRouter(
    prefix="/api/v1/projects",
    tags=["projects"],
    dependencies=[Depends(get_current_claims)],
)


def _handlers(db: AsyncSession = Depends(get_db)) -> ProjectHandlers:
    return ProjectHandlers(db)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectPayload, projects: ProjectHandlers = Depends(_handlers),
):
    return ok_row(ProjectView, await projects.create(body))


@router.get("")
async def list_projects(projects: ProjectHandlers = Depends(_handlers)):
    return ok_rows(ProjectView, await projects.list_all())


@router.get("/{project_id}")
async def get_project(
    project_id: UUID, projects: ProjectHandlers = Depends(_handlers),
):
    return ok_row(ProjectView, await projects.get(project_id))


@router.put("/{project_id}")
async def update_project(
    project_id: UUID,
    body: ProjectPayload,
    projects: ProjectHandlers = Depends(_handlers),
):
    return ok_row(ProjectView, await projects.update(project_id, body))


@router.delete("/{project_id}")
async def delete_project(
    project_id: UUID, projects: ProjectHandlers = Depends(_handlers),
):
    await projects.delete(project_id)
    return ok()


@router.get("/{project_id}/users")
async def get_project_users(
    project_id: UUID, projects: ProjectHandlers = Depends(_handlers),
):
    return ok_rows(UserView, await projects.users(project_id))


@router.get("/{project_id}/todos")
async def get_project_todos(
    project_id: UUID, projects: ProjectHandlers = Depends(_handlers),
):
    return ok_rows(TodoView, await projects.todos(project_id))


@router.post("/{project_id}/users", status_code=status.HTTP_201_CREATED)
async def add_project_user(
    project_id: UUID,
    body: MembershipCreate,
    projects: ProjectHandlers = Depends(_handlers),
):
    return ok_row(MembershipView, await projects.add_member(project_id, body))


@router.delete("/{project_id}/users/{user_id}")
async def remove_project_user(
    project_id: UUID,
    user_id: UUID,
    projects: ProjectHandlers = Depends(_handlers),
):
    await projects.remove_member(project_id, user_id)
    return ok()
