"""Unit tests for YAML settings overlays."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import PrepstreamConfig
from core.config_file import apply_config_file
from core.errors import PrepstreamConfigError


def _base_config(monkeypatch: pytest.MonkeyPatch) -> PrepstreamConfig:
    monkeypatch.delenv("PREPSTREAM_KAFKA_BOOTSTRAP_SERVERS", raising=False)
    return PrepstreamConfig.from_env()


def test_apply_config_file_overrides_fields(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """File values should replace environment values."""
    config_path = tmp_path / "prepstream.yaml"
    config_path.write_text(
        "bootstrap_servers:\n  - kafka-a:9092\n  - kafka-b:9092\n"
        "replication_factor: 3\nconsumer_timeout_ms: 2000\nlog_level: debug\n",
        encoding="utf-8",
    )

    config = apply_config_file(_base_config(monkeypatch), str(config_path))

    assert config.bootstrap_servers == ("kafka-a:9092", "kafka-b:9092")
    assert (config.replication_factor, config.consumer_timeout_ms, config.log_level) == (
        3,
        2000,
        "DEBUG",
    )


def test_apply_config_file_rejects_unknown_key(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Unknown keys should be rejected with the supported list."""
    config_path = tmp_path / "prepstream.yaml"
    config_path.write_text("num_partitions: 6\n", encoding="utf-8")

    with pytest.raises(PrepstreamConfigError, match="Unknown config key"):
        apply_config_file(_base_config(monkeypatch), str(config_path))


def test_apply_config_file_rejects_missing_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A missing path should fail before parsing."""
    with pytest.raises(PrepstreamConfigError, match="does not exist"):
        apply_config_file(_base_config(monkeypatch), str(tmp_path / "absent.yaml"))


def test_apply_config_file_rejects_non_mapping(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A YAML list at the root is not a settings file."""
    config_path = tmp_path / "prepstream.yaml"
    config_path.write_text("- replication_factor\n", encoding="utf-8")

    with pytest.raises(PrepstreamConfigError):
        apply_config_file(_base_config(monkeypatch), str(config_path))
