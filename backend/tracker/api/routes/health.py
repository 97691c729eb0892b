"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
    - Cache and event bus modes are reported on readiness but never fail it

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      load balancer
    - Side channels are advisory: a tracker without Redis or Kafka still
      serves every request, so they are reported, not probed
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from tracker.infrastructure import database
from tracker.infrastructure.cache import RedisCache
from tracker.infrastructure.events import KafkaEventPublisher

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


def _cache_mode(cache) -> str:
    if cache is None:
        return "unconfigured"
    return "redis" if isinstance(cache, RedisCache) else "disabled"


def _event_bus_mode(publisher) -> str:
    if publisher is None:
        return "unconfigured"
    if isinstance(publisher, KafkaEventPublisher):
        return "kafka" if publisher.running else "kafka_unavailable"
    return "log_only"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "workflow-tracker-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — database connectivity plus side-channel modes."""
    state = request.app.state
    side_channels = {
        "cache": _cache_mode(getattr(state, "cache", None)),
        "event_bus": _event_bus_mode(getattr(state, "event_publisher", None)),
    }
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        logger.warning("Readiness failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "checks": {"database": "unhealthy", **side_channels},
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy", **side_channels},
    }
