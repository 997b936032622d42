"""Core constants used across Prepstream modules.

This module centralizes broker defaults and variant identifiers.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_BOOTSTRAP_SERVERS = ("localhost:9092",)
DEFAULT_CLIENT_ID = "prepstream"
DEFAULT_CONSUMER_GROUP = "prepstream-preprocess"
DEFAULT_AUTO_OFFSET_RESET = "earliest"
SUPPORTED_AUTO_OFFSET_RESETS = ("earliest", "latest")
DEFAULT_REPLICATION_FACTOR = 1
DEFAULT_SEND_TIMEOUT_SECONDS = 10.0
DEFAULT_PROGRESS_LOG_INTERVAL = 1000
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
RECORD_ENCODING = "utf-8"
HASH_ALGORITHM = "sha256"

SLACKTEXT_DATA_SOURCE = "slacktext"
SLACKURL_DATA_SOURCE = "slackurl"
SLACKSTREAM_DATA_SOURCE = "slackstream"
DATA_SOURCE_ALIASES = {"channel-style": SLACKTEXT_DATA_SOURCE}
CHANNEL_PROCESSING_TYPE = "channel"
SLACKTEXT_INPUT_CHANNEL = "cedp_slacktext"
SLACKTEXT_CHANNEL_PARTITIONS = 3
SLACK_MIN_WORD_COUNT = 3
SLACK_DEDUP_WINDOW_SIZE = 10000
SLACK_IGNORED_SUBTYPES = (
    "bot_message",
    "channel_join",
    "channel_leave",
    "channel_topic",
    "channel_purpose",
    "channel_name",
    "file_share",
    "pinned_item",
)
