"""Unit tests for stream deduplication helpers."""

from __future__ import annotations

from transforms.exact_deduplication import RecentDuplicateFilter, build_record_id


def test_build_record_id_is_stable_for_equivalent_text() -> None:
    """Record id should normalize whitespace and case before hashing."""
    record_id_one = build_record_id("Stable ID")
    record_id_two = build_record_id(" stable   id ")

    assert record_id_one == record_id_two


def test_recent_duplicate_filter_flags_repeats() -> None:
    """A repeated id inside the window should be flagged."""
    duplicates = RecentDuplicateFilter(window_size=10)

    flags = [duplicates.is_duplicate(record_id) for record_id in ("a", "b", "a")]

    assert flags == [False, False, True]


def test_recent_duplicate_filter_forgets_oldest_ids() -> None:
    """Ids evicted from the window should be accepted again."""
    duplicates = RecentDuplicateFilter(window_size=2)

    flags = [duplicates.is_duplicate(record_id) for record_id in ("a", "b", "c", "a")]

    assert flags == [False, False, False, False]
