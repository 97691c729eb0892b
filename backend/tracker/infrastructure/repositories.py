"""SQL Repositories — the persistence client behind the repository protocols.

Invariants:
    - Every mutating method performs exactly one commit
    - update/set_status on a missing row raise NoResultFound (surfaced by the
      mutation handler as a persistence failure, never as a silent no-op)
    - Reads never commit
    - A duplicate user email (unique index) surfaces as ConflictError, even when
      two requests race past the service-level check

Design Decisions:
    - One AsyncSession per request, injected by FastAPI (get_db)
    - Repositories hold no state beyond the session: safe to build per request
    - rollback on a failed commit so the request session stays usable
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core.domain_types import (
    ProjectId, TaskId, UserId, ProjectStatus, TaskStatus,
)
from tracker.core.errors import ConflictError
from tracker.models.project import Project
from tracker.models.task import Task
from tracker.models.user import User


async def _commit_and_refresh(db: AsyncSession, row: Any) -> Any:
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    await db.refresh(row)
    return row


class SqlProjectRepository:
    """Project persistence on SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user_id: UserId, fields: dict[str, Any]) -> Project:
        project = Project(user_id=user_id, **fields)
        self.db.add(project)
        return await _commit_and_refresh(self.db, project)

    async def get(self, project_id: ProjectId) -> Project | None:
        result = await self.db.execute(
            select(Project).where(Project.id == project_id),
        )
        return result.scalar_one_or_none()

    async def _get_required(self, project_id: ProjectId) -> Project:
        result = await self.db.execute(
            select(Project).where(Project.id == project_id),
        )
        return result.scalar_one()

    async def update(
        self, project_id: ProjectId, fields: dict[str, Any],
    ) -> Project:
        project = await self._get_required(project_id)
        for name, value in fields.items():
            setattr(project, name, value)
        return await _commit_and_refresh(self.db, project)

    async def set_status(
        self, project_id: ProjectId, status: ProjectStatus,
    ) -> Project:
        project = await self._get_required(project_id)
        project.status = status.value
        return await _commit_and_refresh(self.db, project)

    async def list_for_user(
        self, user_id: UserId, status: ProjectStatus | None = None,
        limit: int = 50, offset: int = 0,
    ) -> list[Project]:
        query = (
            select(Project)
            .where(Project.user_id == user_id)
            .order_by(Project.created_at.desc())
        )
        if status:
            query = query.where(Project.status == status.value)
        query = query.limit(limit).offset(offset)
        result = await self.db.execute(query)
        return list(result.scalars().all())


class SqlTaskRepository:
    """Task persistence on SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, project_id: ProjectId, fields: dict[str, Any]) -> Task:
        task = Task(project_id=project_id, **fields)
        self.db.add(task)
        return await _commit_and_refresh(self.db, task)

    async def get(self, task_id: TaskId) -> Task | None:
        result = await self.db.execute(select(Task).where(Task.id == task_id))
        return result.scalar_one_or_none()

    async def set_status(self, task_id: TaskId, status: TaskStatus) -> Task:
        result = await self.db.execute(select(Task).where(Task.id == task_id))
        task = result.scalar_one()
        task.status = status.value
        return await _commit_and_refresh(self.db, task)

    async def list_for_project(self, project_id: ProjectId) -> list[Task]:
        result = await self.db.execute(
            select(Task)
            .where(Task.project_id == project_id)
            .order_by(Task.created_at.asc()),
        )
        return list(result.scalars().all())

    async def list_for_user(
        self, user_id: UserId, status: TaskStatus | None = None,
    ) -> list[Task]:
        query = (
            select(Task)
            .join(Project, Task.project_id == Project.id)
            .where(Project.user_id == user_id)
            .order_by(Task.created_at.asc())
        )
        if status:
            query = query.where(Task.status == status.value)
        result = await self.db.execute(query)
        return list(result.scalars().all())


class SqlUserRepository:
    """User persistence on SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, email: str, password_hash: str) -> User:
        user = User(name=name, email=email, password_hash=password_hash)
        self.db.add(user)
        return await self._save(user)

    async def update(self, user_id: UserId, fields: dict[str, Any]) -> User:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one()
        for name, value in fields.items():
            setattr(user, name, value)
        return await self._save(user)

    async def _save(self, user: User) -> User:
        try:
            return await _commit_and_refresh(self.db, user)
        except IntegrityError as e:
            raise ConflictError("Email is already registered") from e

    async def get(self, user_id: UserId) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
