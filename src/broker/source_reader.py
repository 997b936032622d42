"""Kafka source reader.

This module turns a topic subscription into a lazy stream of raw records.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator

from core.logging_config import get_logger
from core.types import RawRecord

_LOGGER = get_logger(__name__)


class KafkaSourceReader:
    """Reads raw records from one topic at a time."""

    def __init__(self, consumer_factory: Callable[[str], Any]) -> None:
        self._consumer_factory = consumer_factory

    def read_from(self, channel: str) -> Iterator[RawRecord]:
        """Yield records from a topic until the consumer stops.

        The stream is unbounded unless the consumer has an idle timeout.
        A drained stream closes the consumer with a final offset commit.
        A stream that is closed early or fails closes it without one, so
        records that were read but never written are consumed again on
        the next run.

        Args:
            channel: Topic to read.

        Yields:
            Raw records in consumption order.
        """
        consumer = self._consumer_factory(channel)
        _LOGGER.info("source_subscribed", channel=channel)
        try:
            for message in consumer:
                yield RawRecord(
                    channel=message.topic,
                    partition=message.partition,
                    offset=message.offset,
                    key=message.key,
                    value=message.value,
                    timestamp_ms=message.timestamp,
                )
        except BaseException:
            consumer.close(autocommit=False)
            _LOGGER.warning("source_closed_without_commit", channel=channel)
            raise
        consumer.close()
        _LOGGER.info("source_closed", channel=channel)
