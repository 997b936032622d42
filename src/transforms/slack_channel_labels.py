"""Channel labeling for Slack message streams.

This module converts raw Slack message payloads into training records
labeled with the channel the message was posted in. The resulting data
trains models that route a message to the channel it belongs to.
"""

from __future__ import annotations

import json
from typing import Iterable, Iterator, Mapping

from core.constants import (
    RECORD_ENCODING,
    SLACK_DEDUP_WINDOW_SIZE,
    SLACK_IGNORED_SUBTYPES,
    SLACK_MIN_WORD_COUNT,
)
from core.logging_config import get_logger
from core.types import LabeledRecord, RawRecord, TransformStats
from transforms.exact_deduplication import RecentDuplicateFilter, build_record_id
from transforms.slack_text_cleaning import clean_slack_text, count_words

_LOGGER = get_logger(__name__)


class SkippedRecord(Exception):
    """Internal signal that one raw record does not yield a labeled record."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class SlackChannelLabelTransformer:
    """Labels Slack messages with their channel name.

    Failure policy: a record that is not UTF-8 JSON, is not an object,
    lacks a text or channel field, has an ignored subtype, or has too
    few words after cleanup is skipped and counted with a warning log.
    Skips never fail the pipeline. Exact repeats inside the dedup window
    are dropped silently and counted separately.
    """

    def __init__(
        self,
        min_word_count: int = SLACK_MIN_WORD_COUNT,
        dedup_window_size: int = SLACK_DEDUP_WINDOW_SIZE,
    ) -> None:
        self._min_word_count = min_word_count
        self._duplicates = RecentDuplicateFilter(dedup_window_size)
        self.stats = TransformStats()

    def transform(self, records: Iterable[RawRecord]) -> Iterator[LabeledRecord]:
        """Lazily label every usable raw record.

        Args:
            records: Raw Slack message records.

        Yields:
            Labeled records in input order.
        """
        for record in records:
            try:
                labeled = self._label_record(record)
            except SkippedRecord as skip:
                self.stats.skipped += 1
                _LOGGER.warning(
                    "record_skipped",
                    source_ref=record.source_ref,
                    reason=skip.reason,
                )
                continue
            if self._duplicates.is_duplicate(labeled.record_id):
                self.stats.duplicates += 1
                continue
            self.stats.emitted += 1
            yield labeled

    def _label_record(self, record: RawRecord) -> LabeledRecord:
        message = _decode_message(record.value)
        subtype = message.get("subtype")
        if subtype in SLACK_IGNORED_SUBTYPES:
            raise SkippedRecord(f"ignored subtype {subtype}")
        label = _extract_label(message)
        raw_text = message.get("text")
        if not isinstance(raw_text, str):
            raise SkippedRecord("missing text field")
        text = clean_slack_text(raw_text)
        if count_words(text) < self._min_word_count:
            raise SkippedRecord("too few words after cleanup")
        return LabeledRecord(
            record_id=build_record_id(text),
            text=text,
            label=label,
            source_ref=record.source_ref,
        )


def _decode_message(value: bytes | None) -> Mapping[str, object]:
    """Decode one record value into a message mapping."""
    if value is None:
        raise SkippedRecord("empty record value")
    try:
        payload = json.loads(value.decode(RECORD_ENCODING))
    except UnicodeDecodeError as error:
        raise SkippedRecord(f"value is not {RECORD_ENCODING}: {error.reason}") from error
    except json.JSONDecodeError as error:
        raise SkippedRecord(f"value is not JSON: {error.msg}") from error
    if not isinstance(payload, dict):
        raise SkippedRecord("value is not a JSON object")
    return payload


def _extract_label(message: Mapping[str, object]) -> str:
    """Pick the channel name, falling back to the channel id."""
    for key in ("channel_name", "channel"):
        value = message.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip().lstrip("#")
    raise SkippedRecord("missing channel field")
