"""Task routes — parent resolution, ownership and soft delete over HTTP."""

from uuid import uuid4

from sqlalchemy import func, select

from tracker.models.project import Project
from tracker.models.task import Task


async def _seed_task(test_db, project, status="PENDING"):
    task = Task(name="Seeded task", status=status, project_id=project.id)
    test_db.add(task)
    await test_db.commit()
    await test_db.refresh(task)
    return task


async def test_create_task_returns_201(client, seed_project, cache, publisher):
    res = await client.post(
        f"/api/v1/projects/{seed_project.id}/tasks",
        json={"name": "Spec doc", "status": "PENDING"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "PENDING"
    assert body["projectId"] == str(seed_project.id)
    assert cache.deleted == ["tasks"]
    assert publisher.events[0]["event"] == "CREATED"
    assert publisher.events[0]["topic"] == "project-task-events"


async def test_create_task_defaults_to_pending(client, seed_project):
    res = await client.post(
        f"/api/v1/projects/{seed_project.id}/tasks", json={"name": "No status"},
    )
    assert res.status_code == 201
    assert res.json()["status"] == "PENDING"


async def test_create_task_under_missing_project_is_404(
    client, test_db, cache, publisher,
):
    res = await client.post(
        f"/api/v1/projects/{uuid4()}/tasks",
        json={"name": "Orphan", "status": "PENDING"},
    )
    assert res.status_code == 404
    assert "Project not found" in res.json()["error"]["message"]

    count = await test_db.scalar(select(func.count()).select_from(Task))
    assert count == 0
    assert cache.deleted == []
    assert publisher.events == []


async def test_create_task_rejects_unknown_status(client, seed_project):
    res = await client.post(
        f"/api/v1/projects/{seed_project.id}/tasks",
        json={"name": "Bad", "status": "INACTIVE"},
    )
    assert res.status_code == 400


async def test_create_task_with_malformed_project_id_is_400(client):
    res = await client.post(
        "/api/v1/projects/not-a-uuid/tasks", json={"name": "X"},
    )
    assert res.status_code == 400


async def test_update_task_status(client, seed_project, test_db, publisher):
    task = await _seed_task(test_db, seed_project)
    res = await client.patch(
        f"/api/v1/projects/{seed_project.id}/tasks/{task.id}",
        json={"status": "COMPLETED"},
    )
    assert res.status_code == 200
    assert res.json()["status"] == "COMPLETED"
    assert publisher.events[-1]["event"] == "UPDATED"


async def test_update_task_under_missing_project_is_404(
    client, seed_project, test_db, cache,
):
    task = await _seed_task(test_db, seed_project)
    res = await client.put(
        f"/api/v1/projects/{uuid4()}/tasks/{task.id}",
        json={"status": "COMPLETED"},
    )
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Project not found"

    await test_db.refresh(task)
    assert task.status == "PENDING"
    assert cache.deleted == []


async def test_update_task_of_another_project_is_404(
    client, seed_project, seed_user, test_db,
):
    other = Project(name="Other", user_id=seed_user.id)
    test_db.add(other)
    await test_db.commit()
    task = await _seed_task(test_db, other)

    res = await client.patch(
        f"/api/v1/projects/{seed_project.id}/tasks/{task.id}",
        json={"status": "ACTIVE"},
    )
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Task not found for the given project"


async def test_update_task_requires_status(client, seed_project, test_db):
    task = await _seed_task(test_db, seed_project)
    res = await client.patch(
        f"/api/v1/projects/{seed_project.id}/tasks/{task.id}", json={},
    )
    assert res.status_code == 400


async def test_delete_task_is_soft_and_idempotent(
    client, seed_project, test_db, publisher,
):
    task = await _seed_task(test_db, seed_project, status="ACTIVE")
    url = f"/api/v1/projects/{seed_project.id}/tasks/{task.id}"

    first = await client.delete(url)
    second = await client.delete(url)

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["status"] == "ARCHIVED"
    assert second.json()["status"] == "ARCHIVED"
    assert [e["event"] for e in publisher.events] == ["INACTIVE", "INACTIVE"]

    count = await test_db.scalar(select(func.count()).select_from(Task))
    assert count == 1


async def test_delete_task_under_missing_project_is_404(client, seed_project, test_db):
    task = await _seed_task(test_db, seed_project)
    res = await client.delete(f"/api/v1/projects/{uuid4()}/tasks/{task.id}")
    assert res.status_code == 404


async def test_list_tasks_for_project_and_actor(
    client, auth_headers, seed_project, test_db,
):
    await _seed_task(test_db, seed_project, status="COMPLETED")
    await _seed_task(test_db, seed_project, status="PENDING")

    per_project = await client.get(
        f"/api/v1/projects/{seed_project.id}/tasks", headers=auth_headers,
    )
    assert per_project.status_code == 200
    assert len(per_project.json()["tasks"]) == 2

    completed = await client.get(
        "/api/v1/tasks", params={"status": "COMPLETED"}, headers=auth_headers,
    )
    assert [t["status"] for t in completed.json()["tasks"]] == ["COMPLETED"]


async def test_list_tasks_of_unknown_project_is_404(client, auth_headers):
    res = await client.get(
        f"/api/v1/projects/{uuid4()}/tasks", headers=auth_headers,
    )
    assert res.status_code == 404
