"""Task Routes — create/update/soft-delete under a project, plus task reads.

Invariants:
    - Every mutation path carries the owning project id; an unknown project → 404
    - POST returns 201; PUT/PATCH/DELETE return 200
    - DELETE never removes the row: the response carries status ARCHIVED
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from tracker.api.dependencies import (
    get_project_repository, get_task_mutations, get_task_repository,
    require_actor_id,
)
from tracker.core.domain_types import ProjectId, TaskId, TaskStatus, UserId
from tracker.core.errors import ProjectNotFoundError
from tracker.infrastructure.repositories import (
    SqlProjectRepository, SqlTaskRepository,
)
from tracker.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from tracker.services.task_mutations import TaskMutations, serialize_task

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["tasks"])


@router.post(
    "/projects/{project_id}/tasks", response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    project_id: UUID,
    body: TaskCreate,
    mutations: TaskMutations = Depends(get_task_mutations),
):
    """Create a task under an existing project."""
    return await mutations.create(ProjectId(project_id), body)


@router.api_route(
    "/projects/{project_id}/tasks/{task_id}",
    methods=["PUT", "PATCH"], response_model=TaskResponse,
)
async def update_task(
    project_id: UUID,
    task_id: UUID,
    body: TaskUpdate,
    mutations: TaskMutations = Depends(get_task_mutations),
):
    """Set a task's status. The task must belong to the project."""
    return await mutations.update(ProjectId(project_id), TaskId(task_id), body)


@router.delete(
    "/projects/{project_id}/tasks/{task_id}", response_model=TaskResponse,
)
async def delete_task(
    project_id: UUID,
    task_id: UUID,
    mutations: TaskMutations = Depends(get_task_mutations),
):
    """Soft delete: status becomes ARCHIVED."""
    return await mutations.delete(ProjectId(project_id), TaskId(task_id))


@router.get("/projects/{project_id}/tasks")
async def list_project_tasks(
    project_id: UUID,
    actor_id: UserId = Depends(require_actor_id),
    projects: SqlProjectRepository = Depends(get_project_repository),
    tasks: SqlTaskRepository = Depends(get_task_repository),
):
    project = await projects.get(ProjectId(project_id))
    if not project or project.user_id != actor_id:
        raise ProjectNotFoundError(str(project_id))
    rows = await tasks.list_for_project(project.id)
    return {"tasks": [serialize_task(t) for t in rows]}


@router.get("/tasks")
async def list_tasks(
    status_filter: TaskStatus | None = Query(None, alias="status"),
    actor_id: UserId = Depends(require_actor_id),
    tasks: SqlTaskRepository = Depends(get_task_repository),
):
    """All tasks across the actor's projects."""
    rows = await tasks.list_for_user(actor_id, status_filter)
    return {"tasks": [serialize_task(t) for t in rows]}
