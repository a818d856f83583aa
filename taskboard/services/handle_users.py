"""User Handlers — registration, login, and user self-service.

Invariants:
    - Registration validates everything before hashing; the digest is computed
      only for payloads that passed every rule and integrity check
    - Login checks the email exists (404) before any password comparison
    - Tokens carry exactly userId, email, organizationId, role
    - Password digests never leave this module except into the store

Design Decisions:
    - bcrypt work runs in a worker thread (asyncio.to_thread): cost-factored
      hashing would otherwise stall the event loop
    - Email uniqueness: lookup pre-check, plus uq_users_email translated to the
      same BadRequest for concurrent registrations
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import Role, TokenClaims
from taskboard.core.enforce_payloads import (
    check_login, check_user_create, check_user_update,
)
from taskboard.core.errors import bad_request, not_found
from taskboard.infrastructure.credentials import CredentialService
from taskboard.infrastructure.entity_store import EntityStores, unique_write
from taskboard.models import Project, Todo, User
from taskboard.schemas.requests import LoginRequest, UserRegister, UserUpdate
from taskboard.services.integrity import EMAIL_TAKEN_MESSAGE, IntegrityCoordinator

logger = logging.getLogger(__name__)

INVALID_LOGIN_MESSAGE = "Invalid email or password"


class UserHandlers:
    """User operations."""

    def __init__(self, db: AsyncSession, credentials: CredentialService):
        self.db = db
        self.credentials = credentials
        self.stores = EntityStores(db)
        self.integrity = IntegrityCoordinator(self.stores)

    async def register(self, payload: UserRegister) -> User:
        role = check_user_create(
            payload.name, payload.email, payload.organization_id,
            payload.password, payload.role,
        )
        await self.integrity.check_user_create(payload.email, payload.organization_id)
        digest = await asyncio.to_thread(
            self.credentials.hash_password, payload.password,
        )
        async with unique_write(self.db, EMAIL_TAKEN_MESSAGE):
            user = await self.stores.users.create(
                name=payload.name,
                email=payload.email,
                password=digest,
                role=role.value,
                organization_id=payload.organization_id,
            )
        await self.db.commit()
        logger.info(
            "User registered", extra={"entity": "user", "entity_id": str(user.id)},
        )
        return user

    async def login(self, payload: LoginRequest) -> str:
        """Return a signed session token for valid credentials."""
        check_login(payload.email, payload.password)
        user = await self.stores.users.get_by_field("email", payload.email)
        if user is None:
            raise not_found("User not found")
        matches = await asyncio.to_thread(
            self.credentials.verify_password, payload.password, user.password,
        )
        if not matches:
            raise bad_request(INVALID_LOGIN_MESSAGE)
        claims = TokenClaims(
            user_id=str(user.id),
            email=user.email,
            organization_id=str(user.organization_id),
            role=Role(user.role),
        )
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return self.credentials.issue_token(claims)

    async def list_all(self) -> list[User]:
        return await self.stores.users.list_all()

    async def get(self, user_id: UUID) -> User:
        return await self.integrity.require_user(user_id)

    async def update(self, user_id: UUID, payload: UserUpdate) -> User:
        check_user_update(payload.name, payload.email, payload.organization_id)
        await self.integrity.check_user_update(
            user_id, payload.email, payload.organization_id,
        )
        async with unique_write(self.db, EMAIL_TAKEN_MESSAGE):
            user = await self.stores.users.update(user_id, {
                "name": payload.name,
                "email": payload.email,
                "organization_id": payload.organization_id,
            })
        if user is None:
            raise not_found("User not found")
        await self.db.commit()
        return user

    async def delete(self, user_id: UUID) -> None:
        """Memberships and comments cascade; assigned todos become unassigned."""
        removed = await self.stores.users.delete_by_id(user_id)
        if not removed:
            raise not_found("User not found")
        await self.db.commit()
        logger.info(
            "User deleted", extra={"entity": "user", "entity_id": str(user_id)},
        )

    async def projects(self, user_id: UUID) -> list[Project]:
        await self.integrity.require_user(user_id)
        return await self.stores.projects_of_user(user_id)

    async def todos(self, user_id: UUID) -> list[Todo]:
        await self.integrity.require_user(user_id)
        return await self.stores.todos_of_user(user_id)
