"""Unit tests for output channel provisioning."""

from __future__ import annotations

import pytest
from kafka.errors import KafkaError

from broker.channel_admin import ChannelAdmin
from core.errors import PrepstreamChannelError
from core.types import ChannelProvisioningSpec, ChannelProvisionOutcome
from tests.kafka_fakes import InMemoryBroker


def test_create_channel_creates_topic_with_spec() -> None:
    """A new topic should be created with the requested partitions."""
    broker = InMemoryBroker()
    admin = ChannelAdmin(broker.admin)

    outcome = admin.create_channel("labels-out", ChannelProvisioningSpec(num_partitions=3))

    assert outcome is ChannelProvisionOutcome.CREATED
    assert broker.created_topics["labels-out"].num_partitions == 3


def test_create_channel_twice_reports_already_exists() -> None:
    """Second creation should be a distinct, non-failing outcome."""
    broker = InMemoryBroker()
    admin = ChannelAdmin(broker.admin)
    spec = ChannelProvisioningSpec(num_partitions=3)

    first = admin.create_channel("labels-out", spec)
    second = admin.create_channel("labels-out", spec)

    assert (first, second) == (
        ChannelProvisionOutcome.CREATED,
        ChannelProvisionOutcome.ALREADY_EXISTS,
    )


def test_create_channel_passes_topic_configs_through() -> None:
    """Broker topic configs should reach the admin request untouched."""
    broker = InMemoryBroker()
    spec = ChannelProvisioningSpec(
        num_partitions=1,
        replication_factor=2,
        topic_configs={"retention.ms": "86400000", "x.unknown": "kept"},
    )

    ChannelAdmin(broker.admin).create_channel("labels-out", spec)

    created = broker.created_topics["labels-out"]
    assert created.replication_factor == 2
    assert created.topic_configs == {"retention.ms": "86400000", "x.unknown": "kept"}


def test_create_channel_wraps_unreachable_broker() -> None:
    """Connection failures should surface as provisioning failures."""
    broker = InMemoryBroker(reachable=False)

    with pytest.raises(PrepstreamChannelError) as error_info:
        ChannelAdmin(broker.admin).create_channel("labels-out", ChannelProvisioningSpec(3))

    assert error_info.value.channel_name == "labels-out"
    assert error_info.value.__cause__ is not None


def test_create_channel_wraps_broker_rejection_and_closes_client() -> None:
    """Other broker errors should fail provisioning and still close the client."""
    closed: list[bool] = []

    class _RejectingAdmin:
        def create_topics(self, new_topics, validate_only=False):
            raise KafkaError("invalid replication factor")

        def close(self) -> None:
            closed.append(True)

    with pytest.raises(PrepstreamChannelError, match="invalid replication factor"):
        ChannelAdmin(_RejectingAdmin).create_channel("labels-out", ChannelProvisioningSpec(3))

    assert closed == [True]
