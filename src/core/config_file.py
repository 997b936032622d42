"""YAML settings file support.

This module loads an optional YAML mapping and overlays it on the
environment-derived config so deployments can keep broker settings
in one checked-in file.
"""

from __future__ import annotations

from dataclasses import fields, replace
from pathlib import Path
from typing import Mapping, cast

from core.config import (
    PrepstreamConfig,
    parse_bootstrap_servers,
    parse_choice,
    parse_positive_float,
    parse_positive_int,
)
from core.constants import SUPPORTED_AUTO_OFFSET_RESETS, SUPPORTED_LOG_LEVELS
from core.errors import PrepstreamConfigError, PrepstreamDependencyError

SUPPORTED_CONFIG_KEYS = tuple(config_field.name for config_field in fields(PrepstreamConfig))


def apply_config_file(config: PrepstreamConfig, config_path: str) -> PrepstreamConfig:
    """Overlay settings from a YAML file onto an existing config.

    Args:
        config: Base configuration, usually from the environment.
        config_path: Path to a YAML file holding a flat mapping.

    Returns:
        New config with file values applied.

    Raises:
        PrepstreamDependencyError: If PyYAML is unavailable.
        PrepstreamConfigError: If the file is missing, invalid, or has unknown keys.
    """
    payload = _load_yaml_payload(config_path)
    if not isinstance(payload, Mapping):
        raise PrepstreamConfigError(
            f"Config file {config_path} must contain a mapping of setting names to values."
        )
    overrides = _parse_overrides(cast(Mapping[object, object], payload))
    return replace(config, **overrides)


def _load_yaml_payload(config_path: str) -> object:
    """Read and parse one YAML settings file.

    Args:
        config_path: User-supplied file path.

    Returns:
        Parsed YAML document, never ``None``.

    Raises:
        PrepstreamDependencyError: If PyYAML is unavailable.
        PrepstreamConfigError: If the file is missing, unreadable, invalid, or empty.
    """
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise PrepstreamDependencyError(
            "YAML config files require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    config_file = Path(config_path).expanduser().resolve()
    if not config_file.exists():
        raise PrepstreamConfigError(
            f"Config file does not exist at {config_file}. Provide a valid --config-file path."
        )
    try:
        payload = cast(object, yaml.safe_load(config_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise PrepstreamConfigError(
            f"Failed to read config file at {config_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise PrepstreamConfigError(
            f"Failed to parse YAML config at {config_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise PrepstreamConfigError(f"Config file at {config_file} is empty.")
    return payload


def _parse_overrides(payload: Mapping[object, object]) -> dict[str, object]:
    """Validate file keys and convert each value to its config field type.

    Args:
        payload: Top-level YAML mapping.

    Returns:
        Keyword overrides for ``dataclasses.replace``.
    """
    overrides: dict[str, object] = {}
    for key, value in payload.items():
        if not isinstance(key, str) or key not in SUPPORTED_CONFIG_KEYS:
            supported = ", ".join(SUPPORTED_CONFIG_KEYS)
            raise PrepstreamConfigError(
                f"Unknown config key '{key}'. Supported keys: {supported}."
            )
        overrides[key] = _parse_value(key, value)
    return overrides


def _parse_value(key: str, value: object) -> object:
    """Parse one setting with the same rules as its environment variable.

    Args:
        key: Config field name.
        value: Raw YAML value.

    Returns:
        Typed value for the config field.
    """
    if isinstance(value, bool) or (value is None and key != "consumer_timeout_ms"):
        raise PrepstreamConfigError(f"Invalid value for config key '{key}': {value!r}.")
    if key == "bootstrap_servers":
        if isinstance(value, list):
            value = ",".join(str(server) for server in value)
        return parse_bootstrap_servers(str(value))
    if key == "consumer_timeout_ms":
        return None if value is None else parse_positive_int(key, str(value))
    if key in ("replication_factor", "progress_log_interval"):
        return parse_positive_int(key, str(value))
    if key == "send_timeout_seconds":
        return parse_positive_float(key, str(value))
    if key == "auto_offset_reset":
        return parse_choice(key, str(value), SUPPORTED_AUTO_OFFSET_RESETS)
    if key == "log_level":
        return parse_choice(key, str(value).upper(), SUPPORTED_LOG_LEVELS)
    return str(value)
