"""Organization Routes — admin gating, validation, listings and cascade delete.

Invariants:
    - No token → 401 "Authorization token required"
    - Staff token → 401 "Admin access required"
    - Deleting an organization removes its users and projects
"""

from uuid import uuid4

from sqlalchemy import select

from taskboard.models import Project, User

BASE = "/api/v1/organizations"


# ─── Access ──────────────────────────────────────────────────────

async def test_requires_token(client):
    res = await client.get(BASE)
    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Authorization token required"}


async def test_rejects_garbage_token(client):
    res = await client.get(BASE, headers={"Authorization": "Bearer nonsense"})
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid or expired token"


async def test_staff_cannot_manage_organizations(client, staff_headers):
    res = await client.post(BASE, json={"name": "Globex"}, headers=staff_headers)
    assert res.status_code == 401
    assert res.json()["message"] == "Admin access required"


# ─── CRUD ────────────────────────────────────────────────────────

async def test_create_organization(client, admin_headers):
    res = await client.post(BASE, json={"name": "Globex"}, headers=admin_headers)
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["data"]["name"] == "Globex"
    assert "id" in body["data"]


async def test_create_with_short_name(client, admin_headers):
    res = await client.post(BASE, json={"name": "Gx"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Organization name is too short"}


async def test_create_without_name(client, admin_headers):
    res = await client.post(BASE, json={}, headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Organization name is required"


async def test_list_and_filter_by_name(client, admin_headers, organization):
    await client.post(BASE, json={"name": "Globex"}, headers=admin_headers)

    res = await client.get(BASE, headers=admin_headers)
    assert {o["name"] for o in res.json()["data"]} == {"Acme Corp", "Globex"}

    res = await client.get(BASE, params={"name": "Globex"}, headers=admin_headers)
    assert [o["name"] for o in res.json()["data"]] == ["Globex"]


async def test_get_update_organization(client, admin_headers, organization):
    res = await client.get(f"{BASE}/{organization.id}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Acme Corp"

    res = await client.put(
        f"{BASE}/{organization.id}", json={"name": "Acme Inc"}, headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Acme Inc"


async def test_get_unknown_organization(client, admin_headers):
    res = await client.get(f"{BASE}/{uuid4()}", headers=admin_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Organization not found"


async def test_malformed_id_is_bad_request(client, admin_headers):
    res = await client.get(f"{BASE}/not-a-uuid", headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid request data"


async def test_organization_users_and_projects(
    client, admin_headers, organization, admin_user, project,
):
    res = await client.get(f"{BASE}/{organization.id}/users", headers=admin_headers)
    users = res.json()["data"]
    assert [u["email"] for u in users] == ["admin@acme.io"]
    assert "password" not in users[0]

    res = await client.get(f"{BASE}/{organization.id}/projects", headers=admin_headers)
    assert [p["name"] for p in res.json()["data"]] == ["Launch"]


async def test_listing_children_of_unknown_organization(client, admin_headers):
    res = await client.get(f"{BASE}/{uuid4()}/users", headers=admin_headers)
    assert res.status_code == 404


# ─── Delete ──────────────────────────────────────────────────────

async def test_delete_cascades_users_and_projects(
    client, admin_headers, organization, staff_user, project, test_db,
):
    res = await client.delete(f"{BASE}/{organization.id}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json() == {"success": True}

    users = await test_db.execute(
        select(User).where(User.organization_id == organization.id),
    )
    assert users.scalars().all() == []
    projects = await test_db.execute(
        select(Project).where(Project.organization_id == organization.id),
    )
    assert projects.scalars().all() == []


async def test_delete_unknown_organization(client, admin_headers):
    res = await client.delete(f"{BASE}/{uuid4()}", headers=admin_headers)
    assert res.status_code == 404
