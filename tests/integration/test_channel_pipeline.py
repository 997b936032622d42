"""Integration tests for the Slack channel labeling pipeline."""

from __future__ import annotations

from dataclasses import replace

import pytest

from broker.channel_admin import ChannelAdmin
from broker.kafka_connector import KafkaConnector
from broker.sink_writer import KafkaSinkWriter
from broker.source_reader import KafkaSourceReader
from core.config import PrepstreamConfig
from core.errors import DispatchErrorKind, PrepstreamDispatchError
from core.types import ChannelProvisionOutcome
from pipelines.dispatcher import PipelineDispatcher
from pipelines.stream_environment import LocalStreamEnvironment
from tests.kafka_fakes import InMemoryBroker, slack_message


def _dispatcher(broker: InMemoryBroker) -> PipelineDispatcher:
    config = replace(PrepstreamConfig.from_env(), consumer_timeout_ms=100)
    connector = KafkaConnector(
        config,
        consumer_class=broker.consumer,
        producer_class=broker.producer,
        admin_class=broker.admin,
    )
    return PipelineDispatcher(
        config=config,
        channel_admin=ChannelAdmin(connector.create_admin_client),
        reader=KafkaSourceReader(connector.create_consumer),
        writer=KafkaSinkWriter(connector.create_producer, config.send_timeout_seconds),
        environment=LocalStreamEnvironment(config.progress_log_interval),
    )


def _seed(broker: InMemoryBroker) -> None:
    broker.publish_json("cedp_slacktext", slack_message("general", "<@U1> standup moved to noon"))
    broker.publish_json("cedp_slacktext", slack_message("random", "lunch order closes :pizza: soon"))
    broker.publish_json(
        "cedp_slacktext",
        slack_message("general", "<@U2> has joined the channel", subtype="channel_join"),
    )
    broker.publish("cedp_slacktext", b"not json at all")


def test_channel_pipeline_provisions_and_writes_labeled_records() -> None:
    """End to end: provision, read the fixed topic, label, and write."""
    broker = InMemoryBroker()
    _seed(broker)

    result = _dispatcher(broker).dispatch("channel-style", "channel", "labels-out")

    assert broker.created_topics["labels-out"].num_partitions == 3
    assert [(row["label"], row["text"]) for row in broker.written_payloads("labels-out")] == [
        ("general", "standup moved to noon"),
        ("random", "lunch order closes soon"),
    ]
    assert (result.job_result.records_read, result.job_result.records_written) == (4, 2)
    assert (result.job_result.records_skipped, result.job_result.records_duplicate) == (2, 0)


def test_channel_pipeline_runs_when_output_topic_exists() -> None:
    """An existing output topic should not stop the pipeline."""
    broker = InMemoryBroker()
    _seed(broker)
    dispatcher = _dispatcher(broker)

    dispatcher.dispatch("slacktext", "channel", "labels-out")
    second = dispatcher.dispatch("slacktext", "channel", "labels-out")

    assert second.provisioning_outcome is ChannelProvisionOutcome.ALREADY_EXISTS
    assert len(broker.written_payloads("labels-out")) == 4


def test_placeholder_pipeline_fails_without_provisioning() -> None:
    """A placeholder processing type should never create a topic."""
    broker = InMemoryBroker()

    with pytest.raises(PrepstreamDispatchError) as error_info:
        _dispatcher(broker).dispatch("channel-style", "processtype2", "labels-out")

    assert error_info.value.kind is DispatchErrorKind.NOT_IMPLEMENTED
    assert broker.create_calls == 0


def test_channel_pipeline_write_failure_is_fatal() -> None:
    """A failed send should fail the dispatch with the write error as cause."""
    broker = InMemoryBroker(fail_send_at=0)
    _seed(broker)

    with pytest.raises(PrepstreamDispatchError) as error_info:
        _dispatcher(broker).dispatch("slacktext", "channel", "labels-out")

    assert error_info.value.kind is DispatchErrorKind.PIPELINE_FAILED
    assert type(error_info.value.__cause__).__name__ == "PrepstreamWriteError"
    assert broker.written_payloads("labels-out") == []


def test_channel_pipeline_write_failure_closes_consumer_without_commit() -> None:
    """The consumer should be closed uncommitted before the failure surfaces."""
    broker = InMemoryBroker(fail_send_at=0)
    _seed(broker)

    with pytest.raises(PrepstreamDispatchError):
        _dispatcher(broker).dispatch("slacktext", "channel", "labels-out")

    assert "consumer:cedp_slacktext" in broker.closed_clients
    assert broker.uncommitted_closes == ["cedp_slacktext"]


def test_channel_pipeline_counts_duplicate_messages() -> None:
    """Repeated message texts should be dropped and reported as duplicates."""
    broker = InMemoryBroker()
    broker.publish_json("cedp_slacktext", slack_message("general", "standup moved to noon"))
    broker.publish_json("cedp_slacktext", slack_message("general", "standup  moved to noon"))

    result = _dispatcher(broker).dispatch("slacktext", "channel", "labels-out")

    assert (result.job_result.records_written, result.job_result.records_duplicate) == (1, 1)
    assert broker.uncommitted_closes == []


def test_admin_close_failure_is_reported_as_provisioning_failure() -> None:
    """A failing admin client close should still produce a tagged error."""
    broker = InMemoryBroker(admin_close_error=RuntimeError("socket already closed"))
    _seed(broker)

    with pytest.raises(PrepstreamDispatchError) as error_info:
        _dispatcher(broker).dispatch("slacktext", "channel", "labels-out")

    assert error_info.value.kind is DispatchErrorKind.PROVISIONING_FAILED
    assert isinstance(error_info.value.__cause__, RuntimeError)
    assert "consumer:cedp_slacktext" not in broker.closed_clients
