"""Project Routes — create/update/soft-delete plus the actor's project reads.

Invariants:
    - POST returns 201; PUT/PATCH/DELETE return 200
    - DELETE never removes the row: the response carries status INACTIVE
    - Reads are scoped to the authenticated actor and never served from cache

Design Decisions:
    - Actor is optional at the dependency level for POST so the mutation
      service owns the "no actor → 401" rule
    - PUT and PATCH share one handler: both accept a partial body
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from tracker.api.dependencies import (
    get_actor_id, get_project_mutations, get_project_repository,
    require_actor_id,
)
from tracker.core.domain_types import ProjectId, ProjectStatus, UserId
from tracker.core.errors import ProjectNotFoundError
from tracker.infrastructure.repositories import SqlProjectRepository
from tracker.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from tracker.services.project_mutations import ProjectMutations, serialize_project

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.post(
    "", response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate,
    actor_id: UserId | None = Depends(get_actor_id),
    mutations: ProjectMutations = Depends(get_project_mutations),
):
    """Create a project owned by the authenticated user."""
    return await mutations.create(actor_id, body)


@router.get("")
async def list_projects(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    status_filter: ProjectStatus | None = Query(None, alias="status"),
    actor_id: UserId = Depends(require_actor_id),
    projects: SqlProjectRepository = Depends(get_project_repository),
):
    """List the actor's projects with pagination."""
    rows = await projects.list_for_user(
        actor_id, status_filter, limit=limit, offset=offset,
    )
    return {
        "projects": [serialize_project(p) for p in rows],
        "pagination": {"limit": limit, "offset": offset},
    }


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    actor_id: UserId = Depends(require_actor_id),
    projects: SqlProjectRepository = Depends(get_project_repository),
):
    project = await projects.get(ProjectId(project_id))
    if not project or project.user_id != actor_id:
        raise ProjectNotFoundError(str(project_id))
    return project


@router.api_route(
    "/{project_id}", methods=["PUT", "PATCH"], response_model=ProjectResponse,
)
async def update_project(
    project_id: UUID,
    body: ProjectUpdate,
    mutations: ProjectMutations = Depends(get_project_mutations),
):
    """Apply a partial update. Status transitions are not validated."""
    return await mutations.update(ProjectId(project_id), body)


@router.delete("/{project_id}", response_model=ProjectResponse)
async def delete_project(
    project_id: UUID,
    mutations: ProjectMutations = Depends(get_project_mutations),
):
    """Soft delete: status becomes INACTIVE."""
    return await mutations.delete(ProjectId(project_id))
