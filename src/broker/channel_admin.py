"""Output channel provisioning.

This module creates Kafka topics and reports an existing topic as a
distinct outcome so callers can treat provisioning as idempotent.
"""

from __future__ import annotations

from typing import Any, Callable

from kafka.admin import NewTopic
from kafka.errors import TopicAlreadyExistsError

from core.errors import PrepstreamChannelError
from core.logging_config import get_logger
from core.types import ChannelProvisioningSpec, ChannelProvisionOutcome

_LOGGER = get_logger(__name__)


class ChannelAdmin:
    """Creates output topics through a Kafka admin client."""

    def __init__(self, admin_client_factory: Callable[[], Any]) -> None:
        self._admin_client_factory = admin_client_factory

    def create_channel(
        self,
        name: str,
        spec: ChannelProvisioningSpec,
    ) -> ChannelProvisionOutcome:
        """Create a topic unless it already exists.

        Args:
            name: Topic name.
            spec: Partition, replication, and topic config settings.

        Returns:
            ``CREATED`` for a new topic, ``ALREADY_EXISTS`` otherwise.

        Raises:
            PrepstreamChannelError: If the broker is unreachable or rejects the topic.
        """
        new_topic = NewTopic(
            name=name,
            num_partitions=spec.num_partitions,
            replication_factor=spec.replication_factor,
            topic_configs=dict(spec.topic_configs),
        )
        try:
            admin_client = self._admin_client_factory()
        except Exception as error:
            raise PrepstreamChannelError(
                f"Failed to connect to the broker to create topic '{name}': {error}. "
                "Check PREPSTREAM_KAFKA_BOOTSTRAP_SERVERS and broker health.",
                channel_name=name,
            ) from error
        try:
            admin_client.create_topics(new_topics=[new_topic], validate_only=False)
        except TopicAlreadyExistsError:
            _LOGGER.info("channel_exists", channel=name)
            return ChannelProvisionOutcome.ALREADY_EXISTS
        except Exception as error:
            raise PrepstreamChannelError(
                f"Failed to create topic '{name}' with {spec.num_partitions} partitions: {error}.",
                channel_name=name,
            ) from error
        finally:
            admin_client.close()
        _LOGGER.info(
            "channel_created",
            channel=name,
            num_partitions=spec.num_partitions,
            replication_factor=spec.replication_factor,
        )
        return ChannelProvisionOutcome.CREATED
