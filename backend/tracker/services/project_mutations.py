"""Project Mutations — createProject, updateProject, deleteProject.

Invariants:
    - createProject requires an actor id; without one it raises AuthorizationError
      before touching the repository
    - status defaults to IN_PROGRESS when the create body omits it
    - deleteProject is a soft delete: status forced to INACTIVE, row kept,
      idempotent (deleting twice yields INACTIVE both times)
    - Every mutation invalidates the "projects" key and publishes on the project topic

Design Decisions:
    - update/delete of a missing project is a persistence failure (500), not a
      404: there is no precondition lookup for project mutations
    - No transition validation: an INACTIVE project may be reactivated via update
"""

from tracker.core.domain_types import (
    DEFAULT_PROJECT_STATUS, PROJECTS_CACHE_KEY,
    ProjectEvent, ProjectId, ProjectStatus, UserId,
)
from tracker.core.errors import AuthorizationError
from tracker.core.repository_protocols import ProjectLike, ProjectRepository
from tracker.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from tracker.services.mutation_handler import MutationHandler, MutationSpec


def serialize_project(project: ProjectLike) -> dict:
    return ProjectResponse.model_validate(project).model_dump(
        mode="json", by_alias=True,
    )


class ProjectMutations:
    """Project operations on top of the shared mutation handler."""

    def __init__(
        self, projects: ProjectRepository, handler: MutationHandler, topic: str,
    ):
        self.projects = projects
        self.handler = handler
        self.topic = topic

    def _spec(self, operation: str, event: ProjectEvent) -> MutationSpec:
        return MutationSpec(
            operation=operation, cache_key=PROJECTS_CACHE_KEY,
            topic=self.topic, event=event.value,
        )

    async def create(
        self, actor_id: UserId | None, body: ProjectCreate,
    ) -> ProjectLike:
        if not actor_id:
            raise AuthorizationError()
        fields = {
            "name": body.name,
            "description": body.description,
            "deadline": body.deadline,
            "priority": body.priority.value if body.priority else None,
            "client_name": body.client_name,
            "status": (body.status or DEFAULT_PROJECT_STATUS).value,
        }
        return await self.handler.run(
            self._spec("createProject", ProjectEvent.CREATED),
            lambda: self.projects.create(actor_id, fields),
            serialize_project,
        )

    async def update(
        self, project_id: ProjectId, body: ProjectUpdate,
    ) -> ProjectLike:
        fields = body.changed_fields()
        return await self.handler.run(
            self._spec("updateProject", ProjectEvent.UPDATED),
            lambda: self.projects.update(project_id, fields),
            serialize_project,
        )

    async def delete(self, project_id: ProjectId) -> ProjectLike:
        return await self.handler.run(
            self._spec("deleteProject", ProjectEvent.DELETED),
            lambda: self.projects.set_status(project_id, ProjectStatus.INACTIVE),
            serialize_project,
        )
