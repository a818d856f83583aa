"""Health probes and the error envelope at the HTTP boundary.

Invariants:
    - Liveness always 200; readiness 200 with a reachable DB
    - Unknown routes and wrong JSON types render {"success": false, "message"}
    - Unexpected exceptions become 500 "Internal server error" with no details
"""

from taskboard.services.handle_projects import ProjectHandlers


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy"}


async def test_unknown_route_uses_envelope(client):
    res = await client.get("/api/v1/nowhere")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Not Found"}


async def test_wrong_json_type_is_bad_request(client, staff_headers):
    res = await client.post(
        "/api/v1/projects",
        json={"name": "Roadmap", "description": "x", "organizationId": "not-a-uuid"},
        headers=staff_headers,
    )
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Invalid request data"
    assert body["details"]


async def test_auth_is_checked_before_body_shape(client):
    res = await client.post("/api/v1/projects", json={"organizationId": "nope"})
    assert res.status_code == 401


async def test_unexpected_exception_is_opaque_500(client, staff_headers, monkeypatch):
    async def explode(self):
        raise RuntimeError("connection string leaked: secret")

    monkeypatch.setattr(ProjectHandlers, "list_all", explode)

    res = await client.get("/api/v1/projects", headers=staff_headers)
    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Internal server error"}
