"""Shared typed models.

This module defines immutable data models used by the broker adapters,
transforms, and the pipeline dispatcher to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping

from core.constants import DEFAULT_REPLICATION_FACTOR
from core.errors import PrepstreamDispatchError


@dataclass(frozen=True)
class PipelineRequest:
    """Validated parameters for one pipeline run.

    Attributes:
        data_source: First dispatch key, the origin of the raw data.
        processing_type: Second dispatch key, the kind of labeling to run.
        output_channel: Topic that receives labeled records.
        input_channel: Topic read by the selected variant, set by dispatch.
    """

    data_source: str
    processing_type: str
    output_channel: str
    input_channel: str | None = None

    @classmethod
    def validated(
        cls,
        data_source: str | None,
        processing_type: str | None,
        output_channel: str | None,
    ) -> "PipelineRequest":
        """Build a request after checking every required parameter.

        Args:
            data_source: Raw data source parameter.
            processing_type: Raw processing type parameter.
            output_channel: Raw output topic parameter.

        Returns:
            Request with whitespace-stripped values.

        Raises:
            PrepstreamDispatchError: ``MISSING_ARGUMENT`` for the first absent field.
        """
        values = {
            "data_source": data_source,
            "processing_type": processing_type,
            "output_channel": output_channel,
        }
        for field_name, value in values.items():
            if value is None or not value.strip():
                raise PrepstreamDispatchError.missing_argument(field_name)
        return cls(
            data_source=str(data_source).strip(),
            processing_type=str(processing_type).strip(),
            output_channel=str(output_channel).strip(),
        )

    def with_input_channel(self, input_channel: str) -> "PipelineRequest":
        """Return a copy bound to the resolved input topic."""
        return replace(self, input_channel=input_channel)


@dataclass(frozen=True)
class ChannelProvisioningSpec:
    """Settings used when creating an output topic.

    Attributes:
        num_partitions: Partition count for the new topic.
        replication_factor: Replica count for each partition.
        topic_configs: Broker-side topic settings passed through untouched.
    """

    num_partitions: int
    replication_factor: int = DEFAULT_REPLICATION_FACTOR
    topic_configs: Mapping[str, str] = field(default_factory=dict)


class ChannelProvisionOutcome(str, Enum):
    """Non-failing results of a provisioning call."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


@dataclass(frozen=True)
class RawRecord:
    """Raw broker record before transforms.

    Attributes:
        channel: Topic the record was read from.
        partition: Topic partition.
        offset: Offset within the partition.
        key: Optional record key bytes.
        value: Record payload bytes.
        timestamp_ms: Broker timestamp in milliseconds, when present.
    """

    channel: str
    partition: int
    offset: int
    key: bytes | None
    value: bytes
    timestamp_ms: int | None = None

    @property
    def source_ref(self) -> str:
        """Stable ``topic:partition:offset`` reference."""
        return f"{self.channel}:{self.partition}:{self.offset}"


@dataclass(frozen=True)
class LabeledRecord:
    """Labeled training record written to the output topic.

    Attributes:
        record_id: Stable content hash identifier.
        text: Cleaned training text.
        label: Training label.
        source_ref: Reference to the raw record it came from.
    """

    record_id: str
    text: str
    label: str
    source_ref: str

    def to_payload(self) -> dict[str, str]:
        """Return the JSON-serializable output payload."""
        return {
            "record_id": self.record_id,
            "text": self.text,
            "label": self.label,
            "source_ref": self.source_ref,
        }


@dataclass
class TransformStats:
    """Running counters for one transformer instance."""

    emitted: int = 0
    skipped: int = 0
    duplicates: int = 0


@dataclass(frozen=True)
class StreamJobResult:
    """Summary of one finished stream job.

    Attributes:
        job_name: Job identifier.
        records_read: Raw records pulled from the input topic.
        records_written: Labeled records published to the output topic.
        records_skipped: Raw records the transformer could not label.
        records_duplicate: Labeled records dropped as exact repeats.
        duration_seconds: Wall-clock run time.
    """

    job_name: str
    records_read: int
    records_written: int
    records_skipped: int
    records_duplicate: int
    duration_seconds: float


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one successful dispatch.

    Attributes:
        request: Request with the resolved input channel.
        variant_name: Selected variant identifier.
        provisioning_outcome: Result of output topic provisioning, if requested.
        job_result: Stream job summary.
    """

    request: PipelineRequest
    variant_name: str
    provisioning_outcome: ChannelProvisionOutcome | None
    job_result: StreamJobResult
