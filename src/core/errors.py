"""Prepstream exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability, and
dispatch failures carry a kind tag so callers can match on them.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

_FIELD_FLAGS = {
    "data_source": "--data-source",
    "processing_type": "--processing-type",
    "output_channel": "--output-topic",
}


class PrepstreamError(Exception):
    """Base exception for all Prepstream failures."""


class PrepstreamConfigError(PrepstreamError):
    """Raised for invalid runtime configuration."""


class PrepstreamDependencyError(PrepstreamError):
    """Raised when an optional runtime dependency is missing."""


class PrepstreamChannelError(PrepstreamError):
    """Raised when an output channel cannot be provisioned.

    Attributes:
        channel_name: Topic that failed to provision.
    """

    def __init__(self, message: str, channel_name: str) -> None:
        super().__init__(message)
        self.channel_name = channel_name


class PrepstreamWriteError(PrepstreamError):
    """Raised when publishing a record to the output channel fails."""


class DispatchErrorKind(str, Enum):
    """Closed set of pipeline dispatch failure kinds."""

    MISSING_ARGUMENT = "missing_argument"
    INVALID_DATASOURCE = "invalid_datasource"
    INVALID_PROCESSING_TYPE = "invalid_processing_type"
    NOT_IMPLEMENTED = "not_implemented"
    PROVISIONING_FAILED = "provisioning_failed"
    PIPELINE_FAILED = "pipeline_failed"


class PrepstreamDispatchError(PrepstreamError):
    """Raised when a pipeline cannot be dispatched or fails while running.

    Attributes:
        kind: Failure kind tag.
        field: Missing parameter name for ``MISSING_ARGUMENT``.
        data_source: Data source involved in the failure, if known.
        processing_type: Processing type involved in the failure, if known.
    """

    def __init__(
        self,
        kind: DispatchErrorKind,
        message: str,
        *,
        field: str | None = None,
        data_source: str | None = None,
        processing_type: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.field = field
        self.data_source = data_source
        self.processing_type = processing_type

    @classmethod
    def missing_argument(cls, field: str) -> "PrepstreamDispatchError":
        """Build a missing-argument error for one required parameter."""
        return cls(
            DispatchErrorKind.MISSING_ARGUMENT,
            f"Argument {field} missing. Pass {_FIELD_FLAGS.get(field, field)} and retry.",
            field=field,
        )

    @classmethod
    def invalid_datasource(
        cls,
        data_source: str,
        supported: Sequence[str] = (),
    ) -> "PrepstreamDispatchError":
        """Build an error for a data source with no dispatch entry."""
        hint = "Run with --list-variants to see known sources."
        if supported:
            hint = f"Known sources: {', '.join(supported)}."
        return cls(
            DispatchErrorKind.INVALID_DATASOURCE,
            f"Invalid datasource '{data_source}'. {hint}",
            data_source=data_source,
        )

    @classmethod
    def invalid_processing_type(
        cls,
        data_source: str,
        processing_type: str,
    ) -> "PrepstreamDispatchError":
        """Build an error for an unknown processing type of a known source."""
        return cls(
            DispatchErrorKind.INVALID_PROCESSING_TYPE,
            f"Invalid processing type '{processing_type}' for datasource '{data_source}'. "
            "Run with --list-variants to see known processing types.",
            data_source=data_source,
            processing_type=processing_type,
        )

    @classmethod
    def not_implemented(
        cls,
        data_source: str,
        processing_type: str,
    ) -> "PrepstreamDispatchError":
        """Build an error for a declared but unimplemented variant."""
        return cls(
            DispatchErrorKind.NOT_IMPLEMENTED,
            f"Pipeline for datasource '{data_source}' and processing type "
            f"'{processing_type}' is declared but not implemented yet.",
            data_source=data_source,
            processing_type=processing_type,
        )
