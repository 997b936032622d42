"""Unit tests for Slack markup cleanup."""

from __future__ import annotations

import pytest

from transforms.slack_text_cleaning import clean_slack_text, count_words


@pytest.mark.parametrize(
    ("raw_text", "expected"),
    [
        ("<@U024BE7LH> can you review this", "can you review this"),
        ("moving to <#C024BE7LR|general> now", "moving to #general now"),
        ("see <https://example.com/doc|the design doc> first", "see the design doc first"),
        ("logs at <https://example.com/logs> please", "logs at please"),
        ("ship it :rocket: :+1:", "ship it"),
        ("a &lt; b &amp;&amp; c &gt; d", "a < b && c > d"),
        ("<!here> deploy   starts\nsoon", "deploy starts soon"),
        ("meeting at 10:30 today", "meeting at 10:30 today"),
    ],
)
def test_clean_slack_text_removes_markup(raw_text: str, expected: str) -> None:
    """Slack markup should be resolved or removed."""
    assert clean_slack_text(raw_text) == expected


def test_count_words_splits_on_whitespace() -> None:
    """Word counts should ignore repeated whitespace."""
    assert count_words(" one  two\tthree ") == 3
