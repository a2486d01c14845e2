"""Tests for per-tag statistics in tagview/tree/aggregator.py."""

from __future__ import annotations

import pytest

from tagview.records import UNDEFINED_LENGTH, TagKey
from tagview.tree import TagStatistics, TagStats, compute_statistics, merge_statistics
from tests.factories import make_element, make_record

PATIENT_NAME = TagKey(0x0010, 0x0010)
STUDY_DATE = TagKey(0x0008, 0x0020)


class TestComputeStatistics:
    """Tests for compute_statistics()."""

    def test_distinct_values_per_tag(self, two_records):
        stats = compute_statistics(two_records)
        assert stats[STUDY_DATE].distinct_value_count == 1
        assert stats[PATIENT_NAME].distinct_value_count == 2
        assert len(stats) == 2

    def test_tag_missing_from_some_records(self):
        """Only records holding a tag contribute to it."""
        records = [
            make_record("f1", make_element(0x0010, 0x0010, "A")),
            make_record("f2", make_element(0x0020, 0x000D, "1.2.3")),
        ]
        stats = compute_statistics(records)
        assert stats[PATIENT_NAME].values == {"A"}
        assert stats[TagKey(0x0020, 0x000D)].distinct_value_count == 1

    def test_single_record_counts_are_one(self):
        record = make_record(
            "f1",
            make_element(0x0010, 0x0010, "A"),
            make_element(0x0010, 0x0020, "ID1"),
        )
        stats = compute_statistics([record])
        assert all(s.distinct_value_count == 1 for s in stats.values())

    def test_empty_batch(self):
        assert len(compute_statistics([])) == 0

    def test_statistics_are_read_only(self, two_records):
        stats = compute_statistics(two_records)
        with pytest.raises(TypeError):
            stats[PATIENT_NAME] = TagStats(frozenset(), frozenset())  # type: ignore[index]

    def test_differing_keys(self, two_records):
        stats = compute_statistics(two_records)
        assert stats.differing_keys(1) == [PATIENT_NAME]
        assert stats.differing_keys(0) == [STUDY_DATE, PATIENT_NAME]


class TestPadWidth:
    """Tests for TagStats.pad_width()."""

    def test_single_length_needs_no_padding(self):
        stats = TagStats(frozenset({"AB", "CD"}), frozenset({2}))
        assert stats.pad_width() is None

    def test_varying_lengths_use_maximum(self):
        stats = TagStats(frozenset({"AB", "ABCD"}), frozenset({2, 4}))
        assert stats.pad_width() == 4
        assert stats.max_length == 4
        assert stats.distinct_lengths == {2, 4}

    def test_undefined_length_uses_placeholder(self):
        """Variable-but-unbounded lengths fall back to the placeholder width."""
        stats = TagStats(frozenset({"<2 items>", "AB"}), frozenset({2, UNDEFINED_LENGTH}))
        assert stats.pad_width(placeholder=12) == 12
        assert stats.has_undefined_length
        assert stats.max_length == 2

    def test_only_undefined_length(self):
        stats = TagStats(frozenset({"<bulk data>"}), frozenset({UNDEFINED_LENGTH}))
        assert stats.pad_width() is None
        assert stats.max_length is None


class TestMergeStatistics:
    """Tests for merge_statistics()."""

    @pytest.fixture
    def shards(self):
        records = [
            make_record("f1", make_element(0x0010, 0x0010, "A")),
            make_record("f2", make_element(0x0010, 0x0010, "BBBB")),
            make_record("f3", make_element(0x0010, 0x0010, "A"), make_element(0x0008, 0x0020, "X")),
        ]
        return records, [compute_statistics([r]) for r in records]

    def test_merge_equals_single_pass(self, shards):
        records, parts = shards
        merged = merge_statistics(*parts)
        whole = compute_statistics(records)
        assert dict(merged) == dict(whole)

    def test_merge_is_order_independent(self, shards):
        _, (s1, s2, s3) = shards
        assert dict(merge_statistics(s1, s2, s3)) == dict(merge_statistics(s3, s1, s2))
        assert dict(merge_statistics(merge_statistics(s1, s2), s3)) == dict(
            merge_statistics(s1, merge_statistics(s2, s3))
        )

    def test_merge_of_nothing_is_empty(self):
        assert isinstance(merge_statistics(), TagStatistics)
        assert len(merge_statistics()) == 0
