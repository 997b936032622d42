"""Kafka sink writer.

This module publishes labeled records as UTF-8 JSON and stops at the
first failed send so no later record is written past a failure.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable

from kafka.errors import KafkaError

from core.constants import RECORD_ENCODING
from core.errors import PrepstreamWriteError
from core.types import LabeledRecord


class KafkaSinkWriter:
    """Writes labeled records to one topic per call."""

    def __init__(
        self,
        producer_factory: Callable[[], Any],
        send_timeout_seconds: float,
    ) -> None:
        self._producer_factory = producer_factory
        self._send_timeout_seconds = send_timeout_seconds

    def write_to(self, channel: str, records: Iterable[LabeledRecord]) -> int:
        """Publish every record and return the number written.

        Args:
            channel: Destination topic.
            records: Lazy stream of labeled records.

        Returns:
            Count of acknowledged records.

        Raises:
            PrepstreamWriteError: If the producer cannot connect or a send fails.
        """
        try:
            producer = self._producer_factory()
        except KafkaError as error:
            raise PrepstreamWriteError(
                f"Failed to create producer for topic '{channel}': {error}. "
                "Check PREPSTREAM_KAFKA_BOOTSTRAP_SERVERS and broker health."
            ) from error
        written = 0
        try:
            for record in records:
                self._send(producer, channel, record)
                written += 1
            producer.flush()
        finally:
            producer.close()
        return written

    def _send(self, producer: Any, channel: str, record: LabeledRecord) -> None:
        payload = json.dumps(record.to_payload(), sort_keys=True).encode(RECORD_ENCODING)
        try:
            future = producer.send(
                channel,
                key=record.record_id.encode(RECORD_ENCODING),
                value=payload,
            )
            future.get(timeout=self._send_timeout_seconds)
        except KafkaError as error:
            raise PrepstreamWriteError(
                f"Failed to write record {record.source_ref} to topic '{channel}': {error}."
            ) from error
