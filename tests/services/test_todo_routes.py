"""Todo Routes — due-date boundary, status/assignee patches and comments.

Invariants:
    - A due date in the past or equal to now is rejected; now + margin passes
    - Status patch accepts only pending, in_progress, done
    - Assignee patch checks the user (404) before the todo (404)
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from sqlalchemy import select

from taskboard.models import Comment

BASE = "/api/v1/todos"


def _todo(project, **overrides) -> dict:
    body = {
        "title": "Ship release",
        "description": "Tag and publish",
        "due_date": (datetime.now(timezone.utc) + timedelta(days=2)).isoformat(),
        "project_id": str(project.id),
    }
    body.update(overrides)
    return body


# ─── Create / update ─────────────────────────────────────────────

async def test_create_todo(client, staff_headers, project):
    res = await client.post(BASE, json=_todo(project), headers=staff_headers)
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["status"] == "pending"
    assert data["assigned_user_id"] is None


async def test_create_todo_past_due_date(client, staff_headers, project):
    past = (datetime.now(timezone.utc) - timedelta(minutes=1)).isoformat()
    res = await client.post(BASE, json=_todo(project, due_date=past), headers=staff_headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Due date must be in the future"


async def test_create_todo_near_future_due_date(client, staff_headers, project):
    soon = (datetime.now(timezone.utc) + timedelta(seconds=30)).isoformat()
    res = await client.post(BASE, json=_todo(project, due_date=soon), headers=staff_headers)
    assert res.status_code == 201


async def test_create_todo_missing_fields(client, staff_headers, project):
    res = await client.post(
        BASE, json=_todo(project, description=None), headers=staff_headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == (
        "Title, description, due_date, and project_id are required"
    )


async def test_create_todo_unknown_project(client, staff_headers, project):
    res = await client.post(
        BASE, json=_todo(project, project_id=str(uuid4())), headers=staff_headers,
    )
    assert res.status_code == 404
    assert res.json()["message"] == "Project not found"


async def test_update_todo(client, staff_headers, project, todo):
    res = await client.put(
        f"{BASE}/{todo.id}", json=_todo(project, title="Rewrite docs"), headers=staff_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["title"] == "Rewrite docs"


async def test_update_unknown_todo(client, staff_headers, project):
    res = await client.put(f"{BASE}/{uuid4()}", json=_todo(project), headers=staff_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Todo not found"


async def test_list_get_delete_todo(client, staff_headers, todo):
    res = await client.get(BASE, headers=staff_headers)
    assert [t["id"] for t in res.json()["data"]] == [str(todo.id)]

    res = await client.get(f"{BASE}/{todo.id}", headers=staff_headers)
    assert res.json()["data"]["title"] == "Write docs"

    res = await client.delete(f"{BASE}/{todo.id}", headers=staff_headers)
    assert res.json() == {"success": True}
    res = await client.get(f"{BASE}/{todo.id}", headers=staff_headers)
    assert res.status_code == 404


# ─── Patches ─────────────────────────────────────────────────────

async def test_set_status(client, staff_headers, todo):
    res = await client.patch(
        f"{BASE}/{todo.id}/status", json={"status": "done"}, headers=staff_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "done"


async def test_set_invalid_status(client, staff_headers, todo):
    res = await client.patch(
        f"{BASE}/{todo.id}/status", json={"status": "archived"}, headers=staff_headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid status"


async def test_assign_todo(client, staff_headers, staff_user, todo):
    res = await client.patch(
        f"{BASE}/{todo.id}/assign",
        json={"assignedUserId": str(staff_user.id)},
        headers=staff_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["assigned_user_id"] == str(staff_user.id)


async def test_assign_unknown_user(client, staff_headers, todo):
    res = await client.patch(
        f"{BASE}/{todo.id}/assign",
        json={"assignedUserId": str(uuid4())},
        headers=staff_headers,
    )
    assert res.status_code == 404
    assert res.json()["message"] == "User not found"


async def test_assign_checks_user_before_todo(client, staff_headers):
    res = await client.patch(
        f"{BASE}/{uuid4()}/assign",
        json={"assignedUserId": str(uuid4())},
        headers=staff_headers,
    )
    assert res.json()["message"] == "User not found"


# ─── Comments ────────────────────────────────────────────────────

async def test_comment_on_todo_and_list(client, staff_headers, staff_user, todo):
    res = await client.post(
        f"{BASE}/{todo.id}/comments",
        json={"content": "On it", "userId": str(staff_user.id)},
        headers=staff_headers,
    )
    assert res.status_code == 201
    assert res.json()["data"]["todo_id"] == str(todo.id)

    res = await client.get(f"{BASE}/{todo.id}/comments", headers=staff_headers)
    assert [c["content"] for c in res.json()["data"]] == ["On it"]


async def test_delete_todo_cascades_comments(
    client, staff_headers, staff_user, todo, test_db,
):
    await client.post(
        f"{BASE}/{todo.id}/comments",
        json={"content": "On it", "userId": str(staff_user.id)},
        headers=staff_headers,
    )
    await client.delete(f"{BASE}/{todo.id}", headers=staff_headers)

    result = await test_db.execute(select(Comment).where(Comment.todo_id == todo.id))
    assert result.scalars().all() == []


async def test_comment_body_todo_must_match_path(
    client, staff_headers, staff_user, todo, test_db,
):
    res = await client.post(
        f"{BASE}/{todo.id}/comments",
        json={"content": "Wrong place", "userId": str(staff_user.id), "todoId": str(uuid4())},
        headers=staff_headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Todo ID does not match the todo in the path"

    result = await test_db.execute(select(Comment))
    assert result.scalars().all() == []


async def test_comment_body_todo_equal_to_path_is_accepted(
    client, staff_headers, staff_user, todo,
):
    res = await client.post(
        f"{BASE}/{todo.id}/comments",
        json={"content": "Same todo", "userId": str(staff_user.id), "todoId": str(todo.id)},
        headers=staff_headers,
    )
    assert res.status_code == 201
    assert res.json()["data"]["todo_id"] == str(todo.id)
