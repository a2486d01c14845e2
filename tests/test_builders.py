"""Tests for the tree builders in tagview/tree/builders.py."""

from __future__ import annotations

import pytest

from tagview.config import ViewerConfig
from tagview.records import UNDEFINED_LENGTH, TagKey
from tagview.tree import (
    SortMode,
    TreeStore,
    build_by_key_merged,
    build_by_source_order,
    build_tree,
    compute_statistics,
)
from tagview.tree.builders import (
    LINE_BREAK_MARK,
    element_label,
    flatten,
    merged_leaf_label,
    truncate,
)
from tests.factories import make_element, make_record


def child_labels(store: TreeStore, node_id) -> list[str]:
    return [store.label(c) for c in store.children(node_id)]


def key_nodes(store: TreeStore) -> set[TagKey]:
    """Tag keys shown as key nodes in a merged tree."""
    keys = set()
    for group_node in store.children(store.root):
        group = int(store.label(group_node), 16)
        for key_node in store.children(group_node):
            keys.add(TagKey(group, int(store.label(key_node).split()[0], 16)))
    return keys


@pytest.fixture
def varied_records():
    """Three records: tag A identical everywhere, tag B different in each."""
    return [
        make_record(
            f"r{i}",
            make_element(0x0010, 0x0010, "5"),
            make_element(0x0010, 0x0020, value),
        )
        for i, value in enumerate(["1", "2", "3"], start=1)
    ]


class TestBuildBySourceOrder:
    """Tests for build_by_source_order()."""

    def test_single_record_groups(self):
        """One record: root, then one group node per group, one leaf each."""
        record = make_record(
            "file.json",
            make_element(0x0008, 0x0010, "x", length=2),
            make_element(0x0010, 0x0020, "y", length=3),
        )
        store, state = build_by_source_order("study", [record])
        assert store.label(store.root) == "file.json"
        assert child_labels(store, store.root) == ["0008", "0010"]
        first, second = store.children(store.root)
        assert child_labels(store, first) == ["0010 (LO): x"]
        assert child_labels(store, second) == ["0020 (LO): y"]

    def test_group_change_starts_new_group_node(self):
        """A group seen again after another group gets a second node."""
        record = make_record(
            "f",
            make_element(0x0008, 0x0016, "a"),
            make_element(0x0008, 0x0018, "b"),
            make_element(0x0010, 0x0010, "c"),
            make_element(0x0008, 0x0020, "d"),
        )
        store, _ = build_by_source_order("study", [record])
        assert child_labels(store, store.root) == ["0008", "0010", "0008"]
        assert store.child_count(store.children(store.root)[0]) == 2

    def test_multiple_records_get_one_subtree_each(self, two_records):
        store, _ = build_by_source_order("study/", two_records)
        assert store.label(store.root) == "study/"
        assert child_labels(store, store.root) == ["f1", "f2"]
        f1 = store.children(store.root)[0]
        assert child_labels(store, f1) == ["0008", "0010"]
        group = store.children(f1)[1]
        assert child_labels(store, group) == ["0010 PatientName (PN): Doe^J"]

    def test_only_root_open(self, two_records):
        store, state = build_by_source_order("study/", two_records)
        assert state.open_ids == {store.root}
        assert state.selected == store.root

    def test_no_records(self):
        store, state = build_by_source_order("empty", [])
        assert len(store) == 1
        assert store.label(store.root) == "empty"

    def test_shape_invariant(self, two_records, varied_records):
        for records in (two_records, varied_records, two_records[:1]):
            store, _ = build_by_source_order("study", records)
            store.check_integrity()


class TestBuildByKeyMerged:
    """Tests for build_by_key_merged()."""

    def test_diff_scenario(self, varied_records):
        """Threshold 1 keeps only the differing tag, with one leaf per record."""
        stats = compute_statistics(varied_records)
        store, _ = build_by_key_merged("study", varied_records, stats, 1)
        assert child_labels(store, store.root) == ["0010"]
        group = store.children(store.root)[0]
        assert child_labels(store, group) == ["0020"]
        key = store.children(group)[0]
        assert child_labels(store, key) == ["1 | r1", "2 | r2", "3 | r3"]

    def test_threshold_zero_shows_every_tag(self, varied_records):
        stats = compute_statistics(varied_records)
        store, _ = build_by_key_merged("study", varied_records, stats, 0)
        group = store.children(store.root)[0]
        assert child_labels(store, group) == ["0010", "0020"]
        assert store.child_count(store.children(group)[0]) == 3

    def test_one_group_node_across_records(self, two_records):
        stats = compute_statistics(two_records)
        store, _ = build_by_key_merged("study", two_records, stats, 0)
        assert child_labels(store, store.root) == ["0008", "0010"]

    def test_filter_property(self):
        """Threshold 0 shows every key; threshold 1 exactly the differing ones."""
        records = [
            make_record(
                "a",
                make_element(0x0008, 0x0020, "20240101"),
                make_element(0x0010, 0x0010, "Doe"),
                make_element(0x0020, 0x0013, "1"),
            ),
            make_record(
                "b",
                make_element(0x0008, 0x0020, "20240101"),
                make_element(0x0010, 0x0010, "Roe"),
                make_element(0x0028, 0x0010, "512"),
            ),
            make_record("c", make_element(0x0020, 0x0013, "2")),
        ]
        stats = compute_statistics(records)
        all_keys = {e.key for r in records for e in r.elements}

        store, _ = build_by_key_merged("study", records, stats, 0)
        assert key_nodes(store) == all_keys

        store, _ = build_by_key_merged("study", records, stats, 1)
        assert key_nodes(store) == {
            k for k in all_keys if stats[k].distinct_value_count > 1
        }
        store.check_integrity()

    def test_filtered_group_is_kept_empty(self, two_records):
        """A group whose tags are all filtered out stays as an empty node."""
        stats = compute_statistics(two_records)
        store, _ = build_by_key_merged("study", two_records, stats, 1)
        assert child_labels(store, store.root) == ["0008", "0010"]
        assert not store.has_children(store.children(store.root)[0])

    def test_key_label_from_first_sighting(self, two_records):
        stats = compute_statistics(two_records)
        store, _ = build_by_key_merged("study", two_records, stats, 1)
        group = store.children(store.root)[1]
        assert child_labels(store, group) == ["0010 PatientName"]

    def test_root_and_groups_open(self, two_records):
        stats = compute_statistics(two_records)
        store, state = build_by_key_merged("study", two_records, stats, 0)
        assert state.open_ids == {store.root, *store.children(store.root)}

    def test_single_record_falls_back_to_source_order(self, two_records):
        records = two_records[:1]
        stats = compute_statistics(records)
        merged, _ = build_by_key_merged("study", records, stats, 0)
        source, _ = build_by_source_order("study", records)
        assert [merged.label(n) for n in merged] == [source.label(n) for n in source]

    def test_values_padded_when_lengths_vary(self):
        records = [
            make_record("f1", make_element(0x0010, 0x0010, "AB")),
            make_record("f2", make_element(0x0010, 0x0010, "ABCD")),
        ]
        stats = compute_statistics(records)
        store, _ = build_by_key_merged("study", records, stats, 0)
        key = store.children(store.children(store.root)[0])[0]
        assert child_labels(store, key) == ["AB   | f1", "ABCD | f2"]

    def test_undefined_length_uses_placeholder_width(self):
        records = [
            make_record("f1", make_element(0x0008, 0x1115, "<2 items>", vr="SQ", length=UNDEFINED_LENGTH)),
            make_record("f2", make_element(0x0008, 0x1115, "x", vr="SQ", length=2)),
        ]
        stats = compute_statistics(records)
        config = ViewerConfig(placeholder_width=10)
        store, _ = build_by_key_merged("study", records, stats, 0, config)
        key = store.children(store.children(store.root)[0])[0]
        assert child_labels(store, key) == [
            "<2 items>".ljust(10) + " | f1",
            "x".ljust(10) + " | f2",
        ]


class TestBuildTree:
    """Tests for build_tree() and SortMode."""

    def test_dispatch(self, varied_records):
        stats = compute_statistics(varied_records)
        source, _ = build_tree(SortMode.SOURCE, "study", varied_records, stats)
        assert child_labels(source, source.root) == ["r1", "r2", "r3"]
        tag, _ = build_tree(SortMode.TAG, "study", varied_records, stats)
        assert len(key_nodes(tag)) == 2
        diff, _ = build_tree(SortMode.TAG_DIFF, "study", varied_records, stats)
        assert len(key_nodes(diff)) == 1

    def test_sort_mode_values(self):
        assert SortMode("diff") is SortMode.TAG_DIFF
        assert SortMode.TAG.min_diff_threshold == 0
        assert SortMode.TAG_DIFF.min_diff_threshold == 1
        assert SortMode.SOURCE.description == "sorted by filename"


class TestLabels:
    """Tests for label formatting helpers."""

    def test_truncate(self):
        assert truncate("Hello, World!", 10) == "Hello, ..."
        assert truncate("Short", 10) == "Short"
        assert truncate("abcdef", 2) == "ab"

    def test_long_value_truncated_in_source_label(self):
        config = ViewerConfig(max_value_length=10)
        element = make_element(0x0008, 0x1030, "A" * 20, name="StudyDescription")
        assert element_label(element, config) == "1030 StudyDescription (LO): AAAAAAA..."

    def test_sequence_value_not_truncated(self):
        config = ViewerConfig(max_value_length=4)
        element = make_element(0x0008, 0x1115, "<2 items>", vr="SQ", length=UNDEFINED_LENGTH)
        assert element_label(element, config) == "1115 (SQ): <2 items>"

    def test_merged_leaf_value_width_capped(self):
        config = ViewerConfig(merged_value_width=6)
        element = make_element(0x0010, 0x0010, "ABCDEFGHIJ")
        assert merged_leaf_label(element, "f1", 40, config) == "ABC... | f1"

    def test_flatten(self):
        mark = LINE_BREAK_MARK
        assert flatten("line1\r\nline2\nline3\rline4") == f"line1{mark}line2{mark}line3{mark}line4"
        assert flatten("a\tb\x00c\x7f") == "a b c "
        assert flatten("plain") == "plain"

    def test_multiline_values_stay_on_one_row(self):
        """Free-text values with line breaks never produce multi-line labels."""
        element = make_element(
            0x0008, 0x1030, "line1\r\nline2\r\nline3", vr="LT", name="StudyDescription"
        )
        label = element_label(element)
        assert "\n" not in label and "\r" not in label
        assert label == f"1030 StudyDescription (LT): line1{LINE_BREAK_MARK}line2{LINE_BREAK_MARK}line3"

        leaf = merged_leaf_label(element, "scan\n1", 20)
        assert "\n" not in leaf
        assert leaf.endswith(f"| scan{LINE_BREAK_MARK}1")

    def test_built_trees_have_single_line_labels(self):
        records = [
            make_record("f1", make_element(0x0008, 0x1030, "a\r\nb", vr="LT")),
            make_record("f2", make_element(0x0008, 0x1030, "c\td", vr="LT")),
        ]
        stats = compute_statistics(records)
        for mode in SortMode:
            store, _ = build_tree(mode, "study/", records, stats)
            for node_id in store:
                assert not any(ch in store.label(node_id) for ch in "\r\n\t")
