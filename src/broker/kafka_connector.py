"""Kafka client factory.

This module builds consumers, producers, and admin clients from one
validated config so broker settings are applied consistently.
"""

from __future__ import annotations

from typing import Any, Callable

from kafka import KafkaConsumer, KafkaProducer
from kafka.admin import KafkaAdminClient

from core.config import PrepstreamConfig


class KafkaConnector:
    """Builds Kafka clients bound to one configuration."""

    def __init__(
        self,
        config: PrepstreamConfig,
        consumer_class: Callable[..., Any] = KafkaConsumer,
        producer_class: Callable[..., Any] = KafkaProducer,
        admin_class: Callable[..., Any] = KafkaAdminClient,
    ) -> None:
        """Create a connector.

        Args:
            config: Runtime configuration.
            consumer_class: Consumer constructor, replaceable in tests.
            producer_class: Producer constructor, replaceable in tests.
            admin_class: Admin client constructor, replaceable in tests.
        """
        self._config = config
        self._consumer_class = consumer_class
        self._producer_class = producer_class
        self._admin_class = admin_class

    def create_consumer(self, channel: str) -> Any:
        """Create a consumer subscribed to one topic.

        Args:
            channel: Topic to subscribe to.

        Returns:
            Iterable Kafka consumer.
        """
        timeout_ms = self._config.consumer_timeout_ms
        return self._consumer_class(
            channel,
            bootstrap_servers=list(self._config.bootstrap_servers),
            client_id=self._config.client_id,
            group_id=self._config.consumer_group,
            auto_offset_reset=self._config.auto_offset_reset,
            enable_auto_commit=True,
            consumer_timeout_ms=float("inf") if timeout_ms is None else timeout_ms,
        )

    def create_producer(self) -> Any:
        """Create a producer that waits for all in-sync replicas."""
        return self._producer_class(
            bootstrap_servers=list(self._config.bootstrap_servers),
            client_id=self._config.client_id,
            acks="all",
        )

    def create_admin_client(self) -> Any:
        """Create an admin client for topic management."""
        return self._admin_class(
            bootstrap_servers=list(self._config.bootstrap_servers),
            client_id=self._config.client_id,
        )
