"""Mutation Handler — the shared shape of every state-changing operation.

Invariants:
    - Preconditions (actor, parent lookups) are checked by the caller BEFORE run()
    - run() performs exactly one persistence mutation, then at most one cache
      invalidation, then at most one event publication, in that order
    - Only the persistence mutation is fatal: any exception there becomes
      PersistenceError (500) and neither side channel is attempted
    - Cache and event failures are caught, logged, and never change the result
    - No retries, no locks, no timeouts

Design Decisions:
    - The three effects are not transactionally linked: a crash after the
      commit leaves the row durable with a stale cache and/or a missing event.
      Availability of the primary mutation path wins over cache coherence.
    - MutationSpec is data, not a subclass per operation: six operations differ
      only in their operation name, cache key, topic and event tag
    - The event payload is the same JSON the client receives
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from tracker.core.errors import PersistenceError, TrackerError
from tracker.core.repository_protocols import Cache, EventPublisher

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class MutationSpec:
    """What one operation invalidates and announces."""
    operation: str
    cache_key: str
    topic: str
    event: str


class MutationHandler:
    """Runs a persistence mutation followed by best-effort side channels."""

    def __init__(self, cache: Cache, publisher: EventPublisher):
        self.cache = cache
        self.publisher = publisher

    async def run(
        self,
        spec: MutationSpec,
        mutate: Callable[[], Awaitable[T]],
        serialize: Callable[[T], dict[str, Any]],
    ) -> T:
        """Mutate, invalidate, publish. Returns the mutated entity."""
        try:
            entity = await mutate()
        except TrackerError:
            raise
        except Exception as e:
            logger.error(
                f"{spec.operation} failed: {e}",
                exc_info=True,
                extra={"operation": spec.operation},
            )
            raise PersistenceError(spec.operation) from e

        payload = serialize(entity)
        await self._invalidate(spec)
        await self._publish(spec, payload)
        return entity

    async def _invalidate(self, spec: MutationSpec) -> None:
        try:
            await self.cache.delete(spec.cache_key)
        except Exception as e:
            logger.warning(
                f"Cache clear failed: {e}",
                extra={"operation": spec.operation, "cache_key": spec.cache_key},
            )

    async def _publish(self, spec: MutationSpec, payload: dict[str, Any]) -> None:
        try:
            await self.publisher.publish(spec.topic, spec.event, payload)
        except Exception as e:
            logger.warning(
                f"Event publish failed: {e}",
                extra={
                    "operation": spec.operation,
                    "topic": spec.topic,
                    "event": spec.event,
                    "entity_id": payload.get("id"),
                },
            )
