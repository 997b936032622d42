"""Unit tests for pipeline request validation."""

from __future__ import annotations

import pytest

from core.errors import DispatchErrorKind, PrepstreamDispatchError
from core.types import LabeledRecord, PipelineRequest


@pytest.mark.parametrize(
    ("arguments", "missing_field"),
    [
        ((None, "channel", "labels-out"), "data_source"),
        (("slacktext", "", "labels-out"), "processing_type"),
        (("slacktext", "channel", "   "), "output_channel"),
        ((None, None, None), "data_source"),
    ],
)
def test_validated_names_first_missing_field(
    arguments: tuple[str | None, str | None, str | None],
    missing_field: str,
) -> None:
    """Validation should report the first absent parameter."""
    with pytest.raises(PrepstreamDispatchError) as error_info:
        PipelineRequest.validated(*arguments)

    assert error_info.value.kind is DispatchErrorKind.MISSING_ARGUMENT
    assert error_info.value.field == missing_field


def test_validated_strips_whitespace() -> None:
    """Accepted values should be trimmed."""
    request = PipelineRequest.validated(" slacktext ", "channel", " labels-out")

    assert (request.data_source, request.output_channel, request.input_channel) == (
        "slacktext",
        "labels-out",
        None,
    )


def test_labeled_record_payload_has_all_fields() -> None:
    """Output payload should carry id, text, label, and source reference."""
    record = LabeledRecord(record_id="abc", text="hello there team", label="general", source_ref="t:0:1")

    assert record.to_payload() == {
        "record_id": "abc",
        "text": "hello there team",
        "label": "general",
        "source_ref": "t:0:1",
    }
