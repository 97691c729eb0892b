"""Dependency Wiring — builds repositories and services per request.

Invariants:
    - Cache and event publisher live on app.state (created in the lifespan)
      and are shared across requests; repositories are per request
    - get_actor_id never raises: a missing/invalid bearer token means "no actor"
    - require_actor_id raises AuthorizationError (401) when there is no actor

Design Decisions:
    - Every collaborator is a FastAPI dependency so tests swap fakes in with
      app.dependency_overrides instead of patching module globals
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import get_settings
from tracker.core.domain_types import UserId
from tracker.core.errors import AuthorizationError
from tracker.core.repository_protocols import Cache, EventPublisher
from tracker.core.security import decode_access_token
from tracker.infrastructure.database import get_db
from tracker.infrastructure.repositories import (
    SqlProjectRepository, SqlTaskRepository, SqlUserRepository,
)
from tracker.services.accounts import AccountService
from tracker.services.mutation_handler import MutationHandler
from tracker.services.project_mutations import ProjectMutations
from tracker.services.task_mutations import TaskMutations

_bearer = HTTPBearer(auto_error=False)


def get_cache(request: Request) -> Cache:
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        raise RuntimeError("Cache not initialized")
    return cache


def get_event_publisher(request: Request) -> EventPublisher:
    publisher = getattr(request.app.state, "event_publisher", None)
    if publisher is None:
        raise RuntimeError("Event publisher not initialized")
    return publisher


def get_mutation_handler(
    cache: Cache = Depends(get_cache),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> MutationHandler:
    return MutationHandler(cache, publisher)


def get_project_repository(db: AsyncSession = Depends(get_db)) -> SqlProjectRepository:
    return SqlProjectRepository(db)


def get_task_repository(db: AsyncSession = Depends(get_db)) -> SqlTaskRepository:
    return SqlTaskRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> SqlUserRepository:
    return SqlUserRepository(db)


def get_project_mutations(
    projects: SqlProjectRepository = Depends(get_project_repository),
    handler: MutationHandler = Depends(get_mutation_handler),
) -> ProjectMutations:
    return ProjectMutations(
        projects, handler, get_settings().kafka_project_topic,
    )


def get_task_mutations(
    projects: SqlProjectRepository = Depends(get_project_repository),
    tasks: SqlTaskRepository = Depends(get_task_repository),
    handler: MutationHandler = Depends(get_mutation_handler),
) -> TaskMutations:
    return TaskMutations(
        projects, tasks, handler, get_settings().kafka_task_topic,
    )


def get_account_service(
    users: SqlUserRepository = Depends(get_user_repository),
) -> AccountService:
    settings = get_settings()
    return AccountService(
        users,
        settings.jwt_secret_key,
        settings.jwt_algorithm,
        settings.access_token_expire_minutes,
    )


def get_actor_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> UserId | None:
    """Resolve the acting user from the bearer token, if any."""
    if credentials is None:
        return None
    settings = get_settings()
    return decode_access_token(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm,
    )


def require_actor_id(actor_id: UserId | None = Depends(get_actor_id)) -> UserId:
    if not actor_id:
        raise AuthorizationError()
    return actor_id
