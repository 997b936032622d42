"""Slack message markup cleanup.

This module strips Slack-specific markup from message text so the
labeled output holds plain prose suitable for model training.
"""

from __future__ import annotations

import html
import re

_USER_MENTION = re.compile(r"<@[A-Z0-9]+(?:\|[^>]*)?>")
_CHANNEL_REFERENCE = re.compile(r"<#[A-Z0-9]+\|([^>]+)>")
_BARE_CHANNEL_REFERENCE = re.compile(r"<#[A-Z0-9]+>")
_SPECIAL_MENTION = re.compile(r"<!(?:here|channel|everyone)(?:\|[^>]*)?>")
_LABELED_LINK = re.compile(r"<(?:https?|mailto):[^|>]+\|([^>]+)>")
_BARE_LINK = re.compile(r"<(?:https?|mailto):[^>]+>")
_EMOJI_CODE = re.compile(r":[a-z0-9_+\-]*[a-z_+\-][a-z0-9_+\-]*:")


def clean_slack_text(text: str) -> str:
    """Remove Slack markup and normalize whitespace.

    Args:
        text: Raw message text from the Slack export.

    Returns:
        Plain text with mentions, links, and emoji codes resolved or removed.
    """
    cleaned = _USER_MENTION.sub(" ", text)
    cleaned = _SPECIAL_MENTION.sub(" ", cleaned)
    cleaned = _CHANNEL_REFERENCE.sub(lambda match: f"#{match.group(1)}", cleaned)
    cleaned = _BARE_CHANNEL_REFERENCE.sub(" ", cleaned)
    cleaned = _LABELED_LINK.sub(lambda match: match.group(1), cleaned)
    cleaned = _BARE_LINK.sub(" ", cleaned)
    cleaned = _EMOJI_CODE.sub(" ", cleaned)
    cleaned = html.unescape(cleaned)
    return " ".join(cleaned.split())


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())
