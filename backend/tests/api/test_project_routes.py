"""Project routes — create/update/delete over HTTP with the SQLite test DB.

Invariants:
    - POST without a bearer token → 401, nothing written
    - POST with a token → 201, status defaults to IN_PROGRESS
    - DELETE → 200 and INACTIVE, twice in a row
    - Invalid enum values → 400 validation envelope
"""

from uuid import uuid4

from sqlalchemy import func, select

from tracker.models.project import Project


async def test_create_project_returns_201_with_default_status(
    client, auth_headers, seed_user, cache, publisher,
):
    res = await client.post(
        "/api/v1/projects",
        json={"name": "Launch", "priority": "HIGH", "clientName": "Acme"},
        headers=auth_headers,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "IN_PROGRESS"
    assert body["priority"] == "HIGH"
    assert body["clientName"] == "Acme"
    assert body["userId"] == str(seed_user.id)
    assert cache.deleted == ["projects"]
    assert publisher.events[0]["event"] == "CREATED"
    assert publisher.events[0]["payload"] == body


async def test_create_project_with_explicit_status(client, auth_headers):
    res = await client.post(
        "/api/v1/projects",
        json={"name": "Backlog", "status": "PENDING", "deadline": "2027-03-01"},
        headers=auth_headers,
    )
    assert res.status_code == 201
    assert res.json()["status"] == "PENDING"
    assert res.json()["deadline"] == "2027-03-01"


async def test_create_project_without_actor_is_401(client, test_db, cache, publisher):
    res = await client.post("/api/v1/projects", json={"name": "Launch"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"

    count = await test_db.scalar(select(func.count()).select_from(Project))
    assert count == 0
    assert cache.deleted == []
    assert publisher.events == []


async def test_create_project_with_invalid_token_is_401(client):
    res = await client.post(
        "/api/v1/projects", json={"name": "Launch"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert res.status_code == 401


async def test_create_project_rejects_blank_name(client, auth_headers):
    res = await client.post(
        "/api/v1/projects", json={"name": "   "}, headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_project_rejects_unknown_priority(client, auth_headers):
    res = await client.post(
        "/api/v1/projects", json={"name": "X", "priority": "URGENT"},
        headers=auth_headers,
    )
    assert res.status_code == 400


async def test_update_project_partial(client, seed_project, publisher):
    res = await client.patch(
        f"/api/v1/projects/{seed_project.id}",
        json={"description": "now described", "deadline": "2027-01-15"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Seeded"
    assert body["description"] == "now described"
    assert body["deadline"] == "2027-01-15"
    assert publisher.events[-1]["event"] == "UPDATED"


async def test_update_project_via_put(client, seed_project):
    res = await client.put(
        f"/api/v1/projects/{seed_project.id}", json={"status": "COMPLETED"},
    )
    assert res.status_code == 200
    assert res.json()["status"] == "COMPLETED"


async def test_update_project_rejects_null_name(client, seed_project):
    res = await client.patch(
        f"/api/v1/projects/{seed_project.id}", json={"name": None},
    )
    assert res.status_code == 400


async def test_update_project_rejects_blank_name(
    client, seed_project, test_db, cache, publisher,
):
    res = await client.patch(
        f"/api/v1/projects/{seed_project.id}", json={"name": "   "},
    )
    assert res.status_code == 400
    await test_db.refresh(seed_project)
    assert seed_project.name == "Seeded"
    assert cache.deleted == []
    assert publisher.events == []


async def test_update_project_strips_name(client, seed_project):
    res = await client.patch(
        f"/api/v1/projects/{seed_project.id}", json={"name": "  Renamed  "},
    )
    assert res.status_code == 200
    assert res.json()["name"] == "Renamed"


async def test_update_missing_project_is_500(client, cache, publisher):
    res = await client.patch(
        f"/api/v1/projects/{uuid4()}", json={"name": "Ghost"},
    )
    assert res.status_code == 500
    assert res.json()["error"]["message"] == "Internal Server Error: updateProject"
    assert cache.deleted == []
    assert publisher.events == []


async def test_delete_project_is_soft_and_idempotent(client, seed_project, test_db):
    first = await client.delete(f"/api/v1/projects/{seed_project.id}")
    second = await client.delete(f"/api/v1/projects/{seed_project.id}")

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["status"] == "INACTIVE"
    assert second.json()["status"] == "INACTIVE"

    row = await test_db.get(Project, seed_project.id)
    await test_db.refresh(row)
    assert row is not None
    assert row.status == "INACTIVE"


async def test_list_projects_scoped_to_actor(client, auth_headers, seed_project, test_db):
    test_db.add(Project(name="Someone else's", user_id=uuid4()))
    await test_db.commit()

    res = await client.get("/api/v1/projects", headers=auth_headers)
    assert res.status_code == 200
    names = [p["name"] for p in res.json()["projects"]]
    assert names == ["Seeded"]


async def test_list_projects_filters_by_status(client, auth_headers, seed_project):
    await client.delete(f"/api/v1/projects/{seed_project.id}")

    active = await client.get(
        "/api/v1/projects", params={"status": "IN_PROGRESS"}, headers=auth_headers,
    )
    inactive = await client.get(
        "/api/v1/projects", params={"status": "INACTIVE"}, headers=auth_headers,
    )
    assert active.json()["projects"] == []
    assert len(inactive.json()["projects"]) == 1


async def test_list_projects_requires_actor(client):
    res = await client.get("/api/v1/projects")
    assert res.status_code == 401


async def test_get_project_detail_and_404(client, auth_headers, seed_project):
    res = await client.get(
        f"/api/v1/projects/{seed_project.id}", headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.json()["id"] == str(seed_project.id)

    missing = await client.get(f"/api/v1/projects/{uuid4()}", headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json()["error"]["message"] == "Project not found"
