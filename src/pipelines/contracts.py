"""Collaborator contracts consumed by the dispatcher.

Any object with these methods can stand in for the Kafka-backed
implementations, which keeps the dispatcher testable without a broker.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Protocol

from core.types import (
    ChannelProvisioningSpec,
    ChannelProvisionOutcome,
    LabeledRecord,
    RawRecord,
    TransformStats,
)


class ChannelProvisioner(Protocol):
    """Creates output channels."""

    def create_channel(
        self,
        name: str,
        spec: ChannelProvisioningSpec,
    ) -> ChannelProvisionOutcome: ...


class SourceReader(Protocol):
    """Produces a lazy stream of raw records from a channel."""

    def read_from(self, channel: str) -> Iterator[RawRecord]: ...


class RecordTransformer(Protocol):
    """Turns raw records into labeled records and counts what it drops."""

    stats: TransformStats

    def transform(self, records: Iterable[RawRecord]) -> Iterator[LabeledRecord]: ...


class SinkWriter(Protocol):
    """Publishes labeled records to a channel and returns the count written."""

    def write_to(self, channel: str, records: Iterable[LabeledRecord]) -> int: ...
