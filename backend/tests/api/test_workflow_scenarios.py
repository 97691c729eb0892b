"""End-to-end scenarios — project and task lifecycle through the public API."""

from uuid import uuid4


async def test_launch_project_lifecycle(client, auth_headers):
    created = await client.post(
        "/api/v1/projects",
        json={"name": "Launch", "priority": "HIGH"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    assert created.json()["status"] == "IN_PROGRESS"
    project_id = created.json()["id"]

    deleted = await client.delete(f"/api/v1/projects/{project_id}")
    assert deleted.status_code == 200
    assert deleted.json()["status"] == "INACTIVE"

    # parent is soft-deleted but still exists
    task = await client.post(
        f"/api/v1/projects/{project_id}/tasks",
        json={"name": "Spec doc", "status": "PENDING"},
    )
    assert task.status_code == 201
    task_id = task.json()["id"]

    archived = await client.delete(
        f"/api/v1/projects/{project_id}/tasks/{task_id}",
    )
    assert archived.status_code == 200
    assert archived.json()["status"] == "ARCHIVED"


async def test_task_under_random_project_is_not_found(client):
    res = await client.post(
        f"/api/v1/projects/{uuid4()}/tasks",
        json={"name": "Spec doc", "status": "PENDING"},
    )
    assert res.status_code == 404
    assert "Project not found" in res.text


async def test_events_and_invalidations_follow_mutations(
    client, auth_headers, cache, publisher,
):
    created = await client.post(
        "/api/v1/projects", json={"name": "Launch"}, headers=auth_headers,
    )
    project_id = created.json()["id"]
    task = await client.post(
        f"/api/v1/projects/{project_id}/tasks", json={"name": "T"},
    )
    await client.patch(
        f"/api/v1/projects/{project_id}/tasks/{task.json()['id']}",
        json={"status": "COMPLETED"},
    )

    assert cache.deleted == ["projects", "tasks", "tasks"]
    assert [(e["topic"], e["event"]) for e in publisher.events] == [
        ("project-events", "CREATED"),
        ("project-task-events", "CREATED"),
        ("project-task-events", "UPDATED"),
    ]
