"""Boundary Protocols — contracts between the mutation handler and its collaborators.

Invariants:
    - Services NEVER import concrete clients — dependency arrows point inward only
    - Persistence, cache and event bus are all accessed through Protocol types
    - Implementations provided by infrastructure via FastAPI dependency injection;
      tests substitute fakes

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes need no inheritance
    - Repositories return ORM rows typed through the *Like protocols so services
      never depend on SQLAlchemy
    - Cache exposes delete() only: the collection key is an invalidation target,
      nothing reads through it
"""

from datetime import date, datetime
from typing import Any, Protocol

from tracker.core.domain_types import (
    ProjectId, TaskId, UserId, ProjectStatus, TaskStatus,
)


class ProjectLike(Protocol):
    """Structural contract for Project rows passed through services."""
    id: ProjectId
    name: str
    description: str | None
    deadline: date | None
    priority: str | None
    client_name: str | None
    status: str
    user_id: UserId
    created_at: datetime
    updated_at: datetime


class TaskLike(Protocol):
    """Structural contract for Task rows passed through services."""
    id: TaskId
    name: str
    status: str
    project_id: ProjectId
    created_at: datetime
    updated_at: datetime


class UserLike(Protocol):
    id: UserId
    name: str
    email: str
    password_hash: str
    role: str
    status: str
    created_at: datetime


class ProjectRepository(Protocol):
    """Contract for project persistence — implemented by infrastructure."""
    async def create(self, user_id: UserId, fields: dict[str, Any]) -> ProjectLike: ...
    async def get(self, project_id: ProjectId) -> ProjectLike | None: ...
    async def update(
        self, project_id: ProjectId, fields: dict[str, Any],
    ) -> ProjectLike: ...
    async def set_status(
        self, project_id: ProjectId, status: ProjectStatus,
    ) -> ProjectLike: ...
    async def list_for_user(
        self, user_id: UserId, status: ProjectStatus | None = None,
        limit: int = 50, offset: int = 0,
    ) -> list[ProjectLike]: ...


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by infrastructure."""
    async def create(self, project_id: ProjectId, fields: dict[str, Any]) -> TaskLike: ...
    async def get(self, task_id: TaskId) -> TaskLike | None: ...
    async def set_status(self, task_id: TaskId, status: TaskStatus) -> TaskLike: ...
    async def list_for_project(self, project_id: ProjectId) -> list[TaskLike]: ...
    async def list_for_user(
        self, user_id: UserId, status: TaskStatus | None = None,
    ) -> list[TaskLike]: ...


class UserRepository(Protocol):
    """Contract for user persistence — implemented by infrastructure."""
    async def create(
        self, name: str, email: str, password_hash: str,
    ) -> UserLike: ...
    async def get(self, user_id: UserId) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def update(
        self, user_id: UserId, fields: dict[str, Any],
    ) -> UserLike: ...


class Cache(Protocol):
    """Key-value cache used only as an invalidation target."""
    async def delete(self, key: str) -> None: ...
    async def close(self) -> None: ...


class EventPublisher(Protocol):
    """Fire-and-forget event bus. Callers swallow publish failures."""
    async def publish(
        self, topic: str, event: str, payload: dict[str, Any],
    ) -> None: ...
    async def close(self) -> None: ...
