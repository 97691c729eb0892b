"""Event Publishers — fire-and-forget entity events on Kafka, or to the log.

Invariants:
    - Every message body is {"event", "topic", "data", "timestamp"} as JSON
    - Messages keyed by entity id so one entity's events share a partition
    - publish() raises on failure; callers treat publication as best-effort
    - No retries beyond the producer's own; no dead-letter topic

Design Decisions:
    - aiokafka producer started in the lifespan; a failed start is logged and
      leaves the publisher unstarted (requests still succeed, events are lost)
    - LoggingEventPublisher when KAFKA_BOOTSTRAP_SERVERS is empty
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from aiokafka import AIOKafkaProducer

logger = logging.getLogger(__name__)


def build_envelope(topic: str, event: str, payload: dict[str, Any]) -> dict:
    """Wrap an entity payload in the published event envelope."""
    return {
        "event": event,
        "topic": topic,
        "data": payload,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class KafkaEventPublisher:
    """Event publisher on an aiokafka producer."""

    def __init__(self, bootstrap_servers: str, client_id: str = "workflow-tracker"):
        self._producer = AIOKafkaProducer(
            bootstrap_servers=bootstrap_servers,
            client_id=client_id,
            value_serializer=lambda v: json.dumps(v, default=str).encode("utf-8"),
            key_serializer=lambda k: k.encode("utf-8") if k else None,
        )
        self._started = False

    @property
    def running(self) -> bool:
        return self._started

    async def start(self) -> None:
        try:
            await self._producer.start()
            self._started = True
            logger.info("Kafka producer started")
        except Exception as e:
            logger.error(f"Kafka producer failed to start: {e}")

    async def publish(self, topic: str, event: str, payload: dict[str, Any]) -> None:
        if not self._started:
            raise RuntimeError("Kafka producer is not running")
        await self._producer.send_and_wait(
            topic,
            value=build_envelope(topic, event, payload),
            key=str(payload.get("id", "")) or None,
        )

    async def close(self) -> None:
        if self._started:
            await self._producer.stop()
            self._started = False


class LoggingEventPublisher:
    """Publisher stand-in that only logs the event."""

    async def publish(self, topic: str, event: str, payload: dict[str, Any]) -> None:
        logger.info(
            f"Event {event} on {topic}",
            extra={"topic": topic, "event": event, "entity_id": payload.get("id")},
        )

    async def close(self) -> None:
        return None


async def build_event_publisher(
    bootstrap_servers: str, client_id: str,
) -> KafkaEventPublisher | LoggingEventPublisher:
    if bootstrap_servers:
        publisher = KafkaEventPublisher(bootstrap_servers, client_id)
        await publisher.start()
        return publisher
    logger.info("Event bus: log only (KAFKA_BOOTSTRAP_SERVERS not set)")
    return LoggingEventPublisher()
