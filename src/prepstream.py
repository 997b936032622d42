"""Public SDK surface for Prepstream.

This module provides a stable import path for library users.
It re-exports the dispatcher, its collaborators, and typed models.
"""

from __future__ import annotations

from broker.channel_admin import ChannelAdmin
from broker.kafka_connector import KafkaConnector
from broker.sink_writer import KafkaSinkWriter
from broker.source_reader import KafkaSourceReader
from core.config import PrepstreamConfig
from core.config_file import apply_config_file
from core.errors import (
    DispatchErrorKind,
    PrepstreamChannelError,
    PrepstreamDispatchError,
    PrepstreamError,
    PrepstreamWriteError,
)
from core.types import (
    ChannelProvisioningSpec,
    ChannelProvisionOutcome,
    DispatchResult,
    LabeledRecord,
    PipelineRequest,
    RawRecord,
    StreamJobResult,
    TransformStats,
)
from pipelines.dispatcher import PipelineDispatcher, build_dispatcher
from pipelines.stream_environment import LocalStreamEnvironment, StreamJob
from pipelines.variant_registry import VariantRegistry
from pipelines.variants import PipelineVariant, SlackChannelLabelVariant

__all__ = [
    "ChannelAdmin",
    "ChannelProvisionOutcome",
    "ChannelProvisioningSpec",
    "DispatchErrorKind",
    "DispatchResult",
    "KafkaConnector",
    "KafkaSinkWriter",
    "KafkaSourceReader",
    "LabeledRecord",
    "LocalStreamEnvironment",
    "PipelineDispatcher",
    "PipelineRequest",
    "PipelineVariant",
    "PrepstreamChannelError",
    "PrepstreamConfig",
    "PrepstreamDispatchError",
    "PrepstreamError",
    "PrepstreamWriteError",
    "RawRecord",
    "SlackChannelLabelVariant",
    "StreamJob",
    "StreamJobResult",
    "TransformStats",
    "VariantRegistry",
    "apply_config_file",
    "build_dispatcher",
]
