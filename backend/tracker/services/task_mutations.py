"""Task Mutations — createTask, updateTask, deleteTask.

Invariants:
    - Every operation first resolves the owning project; a missing id raises
      RequestValidationFailure (400), an unresolvable one ProjectNotFoundError (404).
      Either way nothing is written, invalidated or published.
    - updateTask also requires the task to exist AND belong to the project (404 otherwise)
    - deleteTask is a soft delete: status forced to ARCHIVED, idempotent
    - Every mutation invalidates the "tasks" key and publishes on the task topic

Design Decisions:
    - The parent project's own status is not checked: tasks may be created
      under an INACTIVE project
    - deleteTask does not check task ownership and announces INACTIVE while the
      row becomes ARCHIVED; consumers rely on those tags as emitted today
"""

from tracker.core.domain_types import (
    DEFAULT_TASK_STATUS, TASKS_CACHE_KEY,
    ProjectId, TaskEvent, TaskId, TaskStatus,
)
from tracker.core.errors import (
    ProjectNotFoundError, RequestValidationFailure, TaskNotFoundError,
)
from tracker.core.repository_protocols import (
    ProjectLike, ProjectRepository, TaskLike, TaskRepository,
)
from tracker.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from tracker.services.mutation_handler import MutationHandler, MutationSpec


def serialize_task(task: TaskLike) -> dict:
    return TaskResponse.model_validate(task).model_dump(
        mode="json", by_alias=True,
    )


class TaskMutations:
    """Task operations on top of the shared mutation handler."""

    def __init__(
        self,
        projects: ProjectRepository,
        tasks: TaskRepository,
        handler: MutationHandler,
        topic: str,
    ):
        self.projects = projects
        self.tasks = tasks
        self.handler = handler
        self.topic = topic

    def _spec(self, operation: str, event: TaskEvent) -> MutationSpec:
        return MutationSpec(
            operation=operation, cache_key=TASKS_CACHE_KEY,
            topic=self.topic, event=event.value,
        )

    async def _require_project(self, project_id: ProjectId | None) -> ProjectLike:
        if not project_id:
            raise RequestValidationFailure("Project id is required", "project_id")
        project = await self.projects.get(project_id)
        if not project:
            raise ProjectNotFoundError(str(project_id))
        return project

    async def create(
        self, project_id: ProjectId | None, body: TaskCreate,
    ) -> TaskLike:
        project = await self._require_project(project_id)
        fields = {
            "name": body.name,
            "status": (body.status or DEFAULT_TASK_STATUS).value,
        }
        return await self.handler.run(
            self._spec("createTask", TaskEvent.CREATED),
            lambda: self.tasks.create(project.id, fields),
            serialize_task,
        )

    async def update(
        self, project_id: ProjectId | None, task_id: TaskId, body: TaskUpdate,
    ) -> TaskLike:
        project = await self._require_project(project_id)
        task = await self.tasks.get(task_id)
        if not task or task.project_id != project.id:
            raise TaskNotFoundError(str(task_id))
        return await self.handler.run(
            self._spec("updateTask", TaskEvent.UPDATED),
            lambda: self.tasks.set_status(task_id, body.status),
            serialize_task,
        )

    async def delete(
        self, project_id: ProjectId | None, task_id: TaskId,
    ) -> TaskLike:
        await self._require_project(project_id)
        return await self.handler.run(
            self._spec("deleteTask", TaskEvent.INACTIVE),
            lambda: self.tasks.set_status(task_id, TaskStatus.ARCHIVED),
            serialize_task,
        )
