"""User Routes — public registration/login plus authenticated user endpoints.

Invariants:
    - POST /register and POST /login are the only public routes in the API
    - Every other route here depends on get_current_claims (401 without a token)
    - Responses use UserView: the password digest is never returned
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_credential_service, get_current_claims
from taskboard.api.envelope import ok, ok_row, ok_rows
from taskboard.infrastructure.credentials import CredentialService
from taskboard.infrastructure.database import get_db
from taskboard.schemas.requests import LoginRequest, UserRegister, UserUpdate
from taskboard.schemas.responses import ProjectView, TodoView, UserView
from taskboard.services.handle_users import UserHandlers

router = APIRouter(prefix="/api/v1/users", tags=["users"])
authenticated = [Depends(get_current_claims)]


def _handlers(
    db: AsyncSession = Depends(get_db),
    credentials: CredentialService = Depends(get_credential_service),
) -> UserHandlers:
    return UserHandlers(db, credentials)


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: UserRegister, users: UserHandlers = Depends(_handlers)):
    """Create a user account."""
    return ok_row(UserView, await users.register(body))


@router.post("/login")
async def login(body: LoginRequest, users: UserHandlers = Depends(_handlers)):
    """Exchange email/password for a session token."""
    return ok(await users.login(body))


@router.get("", dependencies=authenticated)
async def list_users(users: UserHandlers = Depends(_handlers)):
    return ok_rows(UserView, await users.list_all())


@router.get("/{user_id}", dependencies=authenticated)
async def get_user(user_id: UUID, users: UserHandlers = Depends(_handlers)):
    return ok_row(UserView, await users.get(user_id))


@router.put("/{user_id}", dependencies=authenticated)
async def update_user(
    user_id: UUID, body: UserUpdate, users: UserHandlers = Depends(_handlers),
):
    return ok_row(UserView, await users.update(user_id, body))


@router.delete("/{user_id}", dependencies=authenticated)
async def delete_user(user_id: UUID, users: UserHandlers = Depends(_handlers)):
    await users.delete(user_id)
    return ok()


@router.get("/{user_id}/projects", dependencies=authenticated)
async def get_user_projects(user_id: UUID, users: UserHandlers = Depends(_handlers)):
    """Projects the user is a member of."""
    return ok_rows(ProjectView, await users.projects(user_id))


@router.get("/{user_id}/todos", dependencies=authenticated)
async def get_user_todos(user_id: UUID, users: UserHandlers = Depends(_handlers)):
    """Todos assigned to the user."""
    return ok_rows(TodoView, await users.todos(user_id))
