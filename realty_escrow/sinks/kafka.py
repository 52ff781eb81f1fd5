"""Kafka sink publishing ledger events, one topic per event type."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from confluent_kafka import KafkaException, Producer

from realty_escrow.config import KafkaConfig
from realty_escrow.exceptions import SinkError
from realty_escrow.models.base import Event
from realty_escrow.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


@dataclass
class ProducerStats:
    """Delivery counters for one sink."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0
    by_topic: dict[str, int] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        """Share of acknowledged messages that were delivered."""
        acknowledged = self.delivered + self.failed
        return self.delivered / acknowledged if acknowledged else 0.0

    def __str__(self) -> str:
        return f"sent={self.sent}, delivered={self.delivered}, failed={self.failed}"


class KafkaSink:
    """Publish ledger events to ``<topic_prefix>.<event_type>`` topics.

    Events are keyed by their subject (the token id), so every event of one
    property lands on the same partition in commit order.  Each message
    carries ``ce_id``, ``ce_type`` and ``ce_source`` headers in the
    CloudEvents binary style.

    Parameters
    ----------
    config : KafkaConfig | str
        Producer configuration, or just the bootstrap servers.
    """

    def __init__(self, config: KafkaConfig | str) -> None:
        self.config = KafkaConfig(bootstrap_servers=config) if isinstance(config, str) else config
        try:
            self.producer = Producer(self.config.to_dict())
        except KafkaException as e:
            raise SinkError(f"Cannot create Kafka producer: {e}") from e
        self.stats = ProducerStats()

    def _on_delivery(self, err: Any, msg: Any) -> None:
        topic = msg.topic()
        if err is not None:
            self.stats.failed += 1
            logger.error("Delivery to %s failed: %s", topic, err)
            return
        self.stats.delivered += 1
        self.stats.by_topic[topic] = self.stats.by_topic.get(topic, 0) + 1
        logger.debug("Delivered to %s[%d]@%d", topic, msg.partition(), msg.offset())

    def topic_for(self, event_type: str) -> str:
        """Return the topic an event type is published to."""
        return f"{self.config.topic_prefix}.{event_type}"

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Produce one record without waiting for delivery."""
        headers = None
        if isinstance(record, Event):
            key = key or record.subject
            headers = [
                (name, value.encode("utf-8"))
                for name, value in (
                    ("ce_id", record.event_id),
                    ("ce_type", record.event_type),
                    ("ce_source", record.source),
                )
            ]
        payload = json.dumps(to_dict(record), ensure_ascii=False, default=str)

        try:
            self.producer.produce(
                topic=topic,
                key=key.encode("utf-8") if key is not None else None,
                value=payload.encode("utf-8"),
                headers=headers,
                on_delivery=self._on_delivery,
            )
        except (BufferError, KafkaException) as e:
            raise SinkError(f"Cannot produce to {topic}: {e}") from e

        self.stats.sent += 1
        self.producer.poll(0)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Produce records to the entity type's topic, then flush once."""
        topic = self.topic_for(entity_type)
        for record in records:
            self.send(topic, record)
        self.flush()
        logger.info("Produced %d records to %s (%s)", len(records), topic, self.stats)

    def write_events(self, events: list[Event]) -> None:
        """Produce each event to the topic of its own type, then flush once."""
        for event in events:
            self.send(self.topic_for(event.event_type), event)
        self.flush()

    def flush(self, timeout: float = 30.0) -> int:
        """Wait for outstanding deliveries; return how many are still queued."""
        remaining = self.producer.flush(timeout)
        if remaining:
            logger.warning("%s messages still queued after %.1fs", remaining, timeout)
        return remaining

    def close(self) -> None:
        """Flush and report delivery totals."""
        self.flush()
        logger.info("Kafka sink closed (%s)", self.stats)
