"""Kafka broker adapters for channel provisioning, reading, and writing."""

from broker.channel_admin import ChannelAdmin
from broker.kafka_connector import KafkaConnector
from broker.sink_writer import KafkaSinkWriter
from broker.source_reader import KafkaSourceReader

__all__ = ["ChannelAdmin", "KafkaConnector", "KafkaSinkWriter", "KafkaSourceReader"]
