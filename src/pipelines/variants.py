"""Concrete pipeline variants.

A variant names its input channel, says how its output channel must be
provisioned, and builds a fresh transformer for each run.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from core.config import PrepstreamConfig
from core.constants import (
    CHANNEL_PROCESSING_TYPE,
    DEFAULT_REPLICATION_FACTOR,
    SLACKTEXT_CHANNEL_PARTITIONS,
    SLACKTEXT_DATA_SOURCE,
    SLACKTEXT_INPUT_CHANNEL,
)
from core.types import ChannelProvisioningSpec
from pipelines.contracts import RecordTransformer
from transforms.slack_channel_labels import SlackChannelLabelTransformer


class PipelineVariant(ABC):
    """Read, transform, and write capability for one dispatch key."""

    name: str
    input_channel: str

    @property
    def provisioning(self) -> ChannelProvisioningSpec | None:
        """Output channel settings, or None when no provisioning is needed."""
        return None

    @abstractmethod
    def build_transformer(self) -> RecordTransformer:
        """Build the transformer for one run."""


class SlackChannelLabelVariant(PipelineVariant):
    """Labels Slack text messages with their channel."""

    name = f"{SLACKTEXT_DATA_SOURCE}/{CHANNEL_PROCESSING_TYPE}"
    input_channel = SLACKTEXT_INPUT_CHANNEL

    def __init__(self, replication_factor: int = DEFAULT_REPLICATION_FACTOR) -> None:
        self._replication_factor = replication_factor

    @classmethod
    def from_config(cls, config: PrepstreamConfig) -> "SlackChannelLabelVariant":
        return cls(replication_factor=config.replication_factor)

    @property
    def provisioning(self) -> ChannelProvisioningSpec:
        return ChannelProvisioningSpec(
            num_partitions=SLACKTEXT_CHANNEL_PARTITIONS,
            replication_factor=self._replication_factor,
        )

    def build_transformer(self) -> SlackChannelLabelTransformer:
        return SlackChannelLabelTransformer()
