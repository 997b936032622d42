"""Runtime configuration model for Prepstream.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_AUTO_OFFSET_RESET,
    DEFAULT_BOOTSTRAP_SERVERS,
    DEFAULT_CLIENT_ID,
    DEFAULT_CONSUMER_GROUP,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PROGRESS_LOG_INTERVAL,
    DEFAULT_REPLICATION_FACTOR,
    DEFAULT_SEND_TIMEOUT_SECONDS,
    SUPPORTED_AUTO_OFFSET_RESETS,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import PrepstreamConfigError


@dataclass(frozen=True)
class PrepstreamConfig:
    """Validated runtime configuration.

    Attributes:
        bootstrap_servers: Kafka broker addresses.
        client_id: Client id reported to the broker.
        consumer_group: Consumer group used by source readers.
        auto_offset_reset: Offset policy when the group has no committed offset.
        consumer_timeout_ms: Idle timeout that ends reading, or None for unbounded.
        replication_factor: Replication factor for provisioned topics.
        send_timeout_seconds: Wait limit for each producer acknowledgement.
        progress_log_interval: Records between stream progress log events.
        log_level: Minimum log level name.
    """

    bootstrap_servers: tuple[str, ...]
    client_id: str
    consumer_group: str
    auto_offset_reset: str
    consumer_timeout_ms: int | None
    replication_factor: int
    send_timeout_seconds: float
    progress_log_interval: int
    log_level: str

    @classmethod
    def from_env(cls) -> "PrepstreamConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PrepstreamConfigError: If environment values are invalid.
        """
        servers_value = os.getenv(
            "PREPSTREAM_KAFKA_BOOTSTRAP_SERVERS", ",".join(DEFAULT_BOOTSTRAP_SERVERS)
        )
        timeout_value = os.getenv("PREPSTREAM_KAFKA_CONSUMER_TIMEOUT_MS")
        return cls(
            bootstrap_servers=parse_bootstrap_servers(servers_value),
            client_id=os.getenv("PREPSTREAM_KAFKA_CLIENT_ID", DEFAULT_CLIENT_ID),
            consumer_group=os.getenv("PREPSTREAM_KAFKA_CONSUMER_GROUP", DEFAULT_CONSUMER_GROUP),
            auto_offset_reset=parse_choice(
                "PREPSTREAM_KAFKA_AUTO_OFFSET_RESET",
                os.getenv("PREPSTREAM_KAFKA_AUTO_OFFSET_RESET", DEFAULT_AUTO_OFFSET_RESET),
                SUPPORTED_AUTO_OFFSET_RESETS,
            ),
            consumer_timeout_ms=(
                None
                if not timeout_value
                else parse_positive_int("PREPSTREAM_KAFKA_CONSUMER_TIMEOUT_MS", timeout_value)
            ),
            replication_factor=parse_positive_int(
                "PREPSTREAM_KAFKA_REPLICATION_FACTOR",
                os.getenv("PREPSTREAM_KAFKA_REPLICATION_FACTOR", str(DEFAULT_REPLICATION_FACTOR)),
            ),
            send_timeout_seconds=parse_positive_float(
                "PREPSTREAM_KAFKA_SEND_TIMEOUT_SECONDS",
                os.getenv(
                    "PREPSTREAM_KAFKA_SEND_TIMEOUT_SECONDS", str(DEFAULT_SEND_TIMEOUT_SECONDS)
                ),
            ),
            progress_log_interval=parse_positive_int(
                "PREPSTREAM_PROGRESS_LOG_INTERVAL",
                os.getenv("PREPSTREAM_PROGRESS_LOG_INTERVAL", str(DEFAULT_PROGRESS_LOG_INTERVAL)),
            ),
            log_level=parse_choice(
                "PREPSTREAM_LOG_LEVEL",
                os.getenv("PREPSTREAM_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
                SUPPORTED_LOG_LEVELS,
            ),
        )


def parse_bootstrap_servers(raw_value: str) -> tuple[str, ...]:
    """Split a comma-separated broker list.

    Args:
        raw_value: Raw comma-separated ``host:port`` list.

    Returns:
        Non-empty tuple of broker addresses.

    Raises:
        PrepstreamConfigError: If no broker address is given.
    """
    servers = tuple(server.strip() for server in raw_value.split(",") if server.strip())
    if not servers:
        raise PrepstreamConfigError(
            "Invalid PREPSTREAM_KAFKA_BOOTSTRAP_SERVERS value: no broker address given. "
            "Set it to a comma-separated host:port list."
        )
    return servers


def parse_positive_int(name: str, raw_value: str) -> int:
    """Parse a strictly positive integer setting.

    Args:
        name: Setting name for error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        PrepstreamConfigError: If value is not a positive integer.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise PrepstreamConfigError(
            f"Invalid {name} value: expected integer, got '{raw_value}'. "
            f"Set {name} to a positive whole number."
        ) from error
    if value <= 0:
        raise PrepstreamConfigError(
            f"Invalid {name} value: expected a positive integer, got {value}."
        )
    return value


def parse_positive_float(name: str, raw_value: str) -> float:
    """Parse a strictly positive float setting."""
    try:
        value = float(raw_value)
    except ValueError as error:
        raise PrepstreamConfigError(
            f"Invalid {name} value: expected number, got '{raw_value}'. "
            f"Set {name} to a positive number of seconds."
        ) from error
    if value <= 0:
        raise PrepstreamConfigError(
            f"Invalid {name} value: expected a positive number, got {value}."
        )
    return value


def parse_choice(name: str, raw_value: str, choices: tuple[str, ...]) -> str:
    """Validate a setting against a closed set of values."""
    if raw_value not in choices:
        supported = ", ".join(choices)
        raise PrepstreamConfigError(
            f"Invalid {name} value '{raw_value}'. Choose one of: {supported}."
        )
    return raw_value
