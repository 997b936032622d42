"""Closed two-level dispatch table for pipeline variants.

The table maps a data source to its processing types, and each
processing type to a variant factory. A ``None`` entry marks a
placeholder that is declared but not implemented. Every lookup that
does not land on a factory is an error, never a silent no-op.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from core.config import PrepstreamConfig
from core.constants import (
    CHANNEL_PROCESSING_TYPE,
    DATA_SOURCE_ALIASES,
    SLACKSTREAM_DATA_SOURCE,
    SLACKTEXT_DATA_SOURCE,
    SLACKURL_DATA_SOURCE,
)
from core.errors import PrepstreamDispatchError
from pipelines.variants import PipelineVariant, SlackChannelLabelVariant

VariantFactory = Callable[[PrepstreamConfig], PipelineVariant]
ProcessingTable = Mapping[str, VariantFactory | None]
VariantTable = Mapping[str, ProcessingTable | None]

DEFAULT_VARIANT_TABLE: VariantTable = {
    SLACKTEXT_DATA_SOURCE: {
        CHANNEL_PROCESSING_TYPE: SlackChannelLabelVariant.from_config,
        "processtype2": None,
        "processtype3": None,
    },
    SLACKURL_DATA_SOURCE: None,
    SLACKSTREAM_DATA_SOURCE: None,
}


@dataclass(frozen=True)
class VariantListing:
    """One row of the dispatch table for display."""

    data_source: str
    processing_type: str
    implemented: bool


class VariantRegistry:
    """Read-only lookup over a variant table."""

    def __init__(
        self,
        table: VariantTable = DEFAULT_VARIANT_TABLE,
        aliases: Mapping[str, str] = DATA_SOURCE_ALIASES,
    ) -> None:
        self._table = table
        self._aliases = aliases

    def resolve(self, data_source: str, processing_type: str) -> VariantFactory:
        """Find the factory registered for one dispatch key.

        Args:
            data_source: First-level key, aliases allowed.
            processing_type: Second-level key.

        Returns:
            The variant factory for the pair.

        Raises:
            PrepstreamDispatchError: ``INVALID_DATASOURCE`` for an unknown source,
                ``INVALID_PROCESSING_TYPE`` for an unknown processing type of a
                known source, ``NOT_IMPLEMENTED`` for a placeholder.
        """
        canonical_source = self._aliases.get(data_source, data_source)
        if canonical_source not in self._table:
            raise PrepstreamDispatchError.invalid_datasource(
                data_source, self.supported_data_sources()
            )
        processing_table = self._table[canonical_source]
        if processing_table is None:
            raise PrepstreamDispatchError.not_implemented(data_source, processing_type)
        if processing_type not in processing_table:
            raise PrepstreamDispatchError.invalid_processing_type(data_source, processing_type)
        factory = processing_table[processing_type]
        if factory is None:
            raise PrepstreamDispatchError.not_implemented(data_source, processing_type)
        return factory

    def listings(self) -> list[VariantListing]:
        """Return every declared pair, placeholders included."""
        rows: list[VariantListing] = []
        for data_source, processing_table in sorted(self._table.items()):
            if processing_table is None:
                rows.append(VariantListing(data_source, "*", implemented=False))
                continue
            for processing_type, factory in sorted(processing_table.items()):
                rows.append(
                    VariantListing(data_source, processing_type, implemented=factory is not None)
                )
        return rows

    def supported_data_sources(self) -> tuple[str, ...]:
        """Return canonical data source names and their aliases."""
        return tuple(sorted(set(self._table) | set(self._aliases)))
