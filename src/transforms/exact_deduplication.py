"""Exact text deduplication for streams.

This module hashes normalized text and remembers a bounded window of
recent hashes, so repeated messages are dropped without unbounded memory.
"""

from __future__ import annotations

from collections import OrderedDict
import hashlib

from core.constants import HASH_ALGORITHM


class RecentDuplicateFilter:
    """Tracks the most recent record ids and reports repeats."""

    def __init__(self, window_size: int) -> None:
        self._window_size = window_size
        self._seen: OrderedDict[str, None] = OrderedDict()

    def is_duplicate(self, record_id: str) -> bool:
        """Return True if the id was seen inside the window, then remember it.

        Args:
            record_id: Content hash of the record.

        Returns:
            Whether the id is a repeat.
        """
        if record_id in self._seen:
            self._seen.move_to_end(record_id)
            return True
        self._seen[record_id] = None
        if len(self._seen) > self._window_size:
            self._seen.popitem(last=False)
        return False


def build_record_id(text: str) -> str:
    """Build a stable record id from normalized text.

    Args:
        text: Raw text content.

    Returns:
        Stable hash id that ignores case and whitespace differences.
    """
    return _hash_text(_normalize_text(text))


def _normalize_text(text: str) -> str:
    """Normalize text for stable dedup hashing.

    Args:
        text: Raw text content.

    Returns:
        Lowercased text with normalized whitespace.
    """
    normalized = " ".join(text.lower().split())
    return normalized.strip()


def _hash_text(text: str) -> str:
    """Hash a string using configured digest algorithm.

    Args:
        text: Input text.

    Returns:
        Hex digest string.
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(text.encode("utf-8"))
    return hasher.hexdigest()
