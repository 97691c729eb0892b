"""Stats Routes — dashboard analytics for the authenticated user.

Invariants:
    - Read-only; computed on every request from the actor's projects and tasks
    - All aggregation happens in core/workflow_stats.py (pure)
    - Task figures only cover the projects that were loaded, so totals and
      per-project progress always agree
"""

from fastapi import APIRouter, Depends

from tracker.api.dependencies import (
    get_project_repository, get_task_repository, require_actor_id,
)
from tracker.core.domain_types import UserId
from tracker.core.workflow_stats import compute_overview
from tracker.infrastructure.repositories import (
    SqlProjectRepository, SqlTaskRepository,
)

router = APIRouter(prefix="/api/v1/stats", tags=["stats"])

# Dashboard reads every project at once; no pagination here.
_MAX_PROJECTS = 1000


@router.get("/overview")
async def overview(
    actor_id: UserId = Depends(require_actor_id),
    projects: SqlProjectRepository = Depends(get_project_repository),
    tasks: SqlTaskRepository = Depends(get_task_repository),
):
    """Status counts, completion rate and per-project progress."""
    project_rows = await projects.list_for_user(actor_id, limit=_MAX_PROJECTS)
    loaded = {p.id for p in project_rows}
    task_rows = [
        t for t in await tasks.list_for_user(actor_id) if t.project_id in loaded
    ]
    return compute_overview(project_rows, task_rows)
