"""Service test fixtures — async DB, FastAPI test client, seeded rows and tokens.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys ON
    - get_db dependency overridden to use test DB session
    - get_credential_service overridden with a low-cost bcrypt service
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (cascades still exercised because the FK pragma is enabled)
    - Seed fixtures write through the ORM directly, not the API, so each test
      only exercises the route it is about
    - raise_app_exceptions=False: the catch-all handler's 500 reaches the test
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from taskboard.api.dependencies import get_credential_service
from taskboard.core.domain_types import Role, TokenClaims
from taskboard.db.base import Base
from taskboard.infrastructure.credentials import CredentialService
from taskboard.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
from taskboard.models import Organization, Project, Todo, User
import taskboard.infrastructure.database as db_module
from taskboard.main import app

TEST_SECRET = "service-test-secret"
VALID_PASSWORD = "Abcdef1!"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def credentials():
    return CredentialService(
        TEST_SECRET, token_ttl=timedelta(hours=24), bcrypt_rounds=4,
    )


@pytest.fixture
async def client(test_engine, test_session_factory, credentials):
    """FastAPI test client with DB and credential dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_credential_service] = lambda: credentials

    # Patch db_manager for the readiness probe, which reads it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seeded rows ─────────────────────────────────────────────────

@pytest.fixture
async def organization(test_db):
    org = Organization(name="Acme Corp")
    test_db.add(org)
    await test_db.commit()
    return org


async def _seed_user(test_db, credentials, organization, email, role):
    user = User(
        name=f"{role.value.title()} User",
        email=email,
        password=credentials.hash_password(VALID_PASSWORD),
        role=role.value,
        organization_id=organization.id,
    )
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def admin_user(test_db, credentials, organization):
    return await _seed_user(
        test_db, credentials, organization, "admin@acme.io", Role.ADMIN,
    )


@pytest.fixture
async def staff_user(test_db, credentials, organization):
    return await _seed_user(
        test_db, credentials, organization, "staff@acme.io", Role.STAFF,
    )


@pytest.fixture
async def project(test_db, organization):
    row = Project(
        name="Launch", description="Launch plan", organization_id=organization.id,
    )
    test_db.add(row)
    await test_db.commit()
    return row


@pytest.fixture
async def todo(test_db, project):
    row = Todo(
        title="Write docs",
        description="Document the API",
        due_date=datetime.now(timezone.utc) + timedelta(days=7),
        project_id=project.id,
    )
    test_db.add(row)
    await test_db.commit()
    return row


# ─── Auth headers ────────────────────────────────────────────────

def _bearer(credentials: CredentialService, user: User) -> dict:
    claims = TokenClaims(
        user_id=str(user.id),
        email=user.email,
        organization_id=str(user.organization_id),
        role=Role(user.role),
    )
    return {"Authorization": f"Bearer {credentials.issue_token(claims)}"}


@pytest.fixture
def admin_headers(credentials, admin_user):
    return _bearer(credentials, admin_user)


@pytest.fixture
def staff_headers(credentials, staff_user):
    return _bearer(credentials, staff_user)
