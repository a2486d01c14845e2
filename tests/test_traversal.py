"""Tests for traversal functions in tagview/tree/traversal.py."""

from __future__ import annotations

import pytest

from tagview.tree import TreeStore, VisibilityState
from tagview.tree import traversal


def labels(store: TreeStore, node_ids) -> list[str]:
    return [store.label(n) for n in node_ids]


class TestVisibleSequence:
    """Tests for visible_sequence() and iter_preorder()."""

    def test_closed_root_shows_only_root(self, sample_tree):
        store, state, _ = sample_tree
        assert labels(store, traversal.visible_sequence(store, state)) == ["root"]

    def test_partially_open(self, sample_tree):
        """Only children of open nodes are listed."""
        store, state, ids = sample_tree
        state.open(ids["a"])
        assert labels(store, traversal.visible_sequence(store, state)) == [
            "root", "a", "a1", "a2", "b", "c"
        ]

    def test_all_open_equals_preorder(self, open_sample_tree):
        """With everything open the visible sequence is the full pre-order."""
        store, state, _ = open_sample_tree
        expected = ["root", "a", "a1", "a2", "a2x", "b", "c", "c1"]
        assert labels(store, traversal.visible_sequence(store, state)) == expected
        assert labels(store, traversal.iter_preorder(store)) == expected

    def test_preorder_ignores_state_when_not_given(self, sample_tree):
        store, _, ids = sample_tree
        assert labels(store, traversal.iter_preorder(store, ids["a"])) == [
            "a", "a1", "a2", "a2x"
        ]

    def test_descendants(self, sample_tree):
        store, _, ids = sample_tree
        assert labels(store, traversal.descendants(store, ids["a"])) == ["a1", "a2", "a2x"]
        assert traversal.descendants(store, ids["b"]) == []


class TestNextPrevVisible:
    """Tests for next_visible() and prev_visible()."""

    def test_next_visible_walk_matches_sequence(self, open_sample_tree):
        """Stepping with next_visible() from the root reproduces the sequence."""
        store, state, _ = open_sample_tree
        walked = [store.root]
        following = traversal.next_visible(store, state, store.root)
        while following is not None:
            walked.append(following)
            following = traversal.next_visible(store, state, following)
        assert walked == traversal.visible_sequence(store, state)

    def test_prev_visible_walk_reverses_sequence(self, open_sample_tree):
        """Stepping back with prev_visible() from the end reverses the sequence."""
        store, state, _ = open_sample_tree
        sequence = traversal.visible_sequence(store, state)
        walked = [sequence[-1]]
        preceding = traversal.prev_visible(store, state, sequence[-1])
        while preceding is not None:
            walked.append(preceding)
            preceding = traversal.prev_visible(store, state, preceding)
        assert walked == list(reversed(sequence))

    def test_next_skips_closed_subtree(self, sample_tree):
        """A closed node is stepped over, not into."""
        store, state, ids = sample_tree
        state.open(ids["root"])
        assert traversal.next_visible(store, state, ids["a"]) == ids["b"]

    def test_next_climbs_out_of_subtree(self, open_sample_tree):
        store, state, ids = open_sample_tree
        assert traversal.next_visible(store, state, ids["a2x"]) == ids["b"]

    def test_only_open_false_walks_everything(self, sample_tree):
        store, state, ids = sample_tree
        assert traversal.next_visible(store, state, ids["a"], only_open=False) == ids["a1"]
        assert traversal.prev_visible(store, state, ids["b"], only_open=False) == ids["a2x"]

    def test_prev_into_open_sibling_subtree(self, open_sample_tree):
        """prev_visible() lands on the deepest last visible descendant."""
        store, state, ids = open_sample_tree
        assert traversal.prev_visible(store, state, ids["b"]) == ids["a2x"]
        state.close(ids["a2"])
        assert traversal.prev_visible(store, state, ids["b"]) == ids["a2"]

    def test_boundaries(self, open_sample_tree):
        """The ends of the tree return None."""
        store, state, ids = open_sample_tree
        assert traversal.prev_visible(store, state, ids["root"]) is None
        assert traversal.next_visible(store, state, ids["c1"]) is None


class TestSiblings:
    """Tests for next_sibling() and prev_sibling()."""

    def test_sibling_lookup(self, sample_tree):
        store, _, ids = sample_tree
        assert traversal.next_sibling(store, ids["a"]) == ids["b"]
        assert traversal.prev_sibling(store, ids["c"]) == ids["b"]

    def test_sibling_boundaries(self, sample_tree):
        """First/last child and the root have no sibling on that side."""
        store, _, ids = sample_tree
        assert traversal.prev_sibling(store, ids["a"]) is None
        assert traversal.next_sibling(store, ids["c"]) is None
        assert traversal.next_sibling(store, ids["root"]) is None
        assert traversal.prev_sibling(store, ids["root"]) is None

    def test_level(self, sample_tree):
        store, _, ids = sample_tree
        assert traversal.level(store, ids["a2x"]) == 3


class TestNearestVisible:
    """Tests for nearest_visible()."""

    def test_visible_node_is_returned_unchanged(self, open_sample_tree):
        store, state, ids = open_sample_tree
        assert traversal.nearest_visible(store, state, ids["a2x"]) == ids["a2x"]

    def test_hidden_node_maps_to_topmost_closed_ancestor(self, open_sample_tree):
        store, state, ids = open_sample_tree
        state.close(ids["a"])
        assert traversal.nearest_visible(store, state, ids["a2x"]) == ids["a"]


class TestAdjustViewport:
    """Tests for adjust_viewport()."""

    @pytest.fixture
    def sequence(self):
        store = TreeStore("root")
        for i in range(19):
            store.add_child(store.root, f"n{i}")
        state = VisibilityState(store)
        state.open(store.root)
        return traversal.visible_sequence(store, state)

    def test_scrolls_down_to_keep_selection_last(self, sequence):
        """Page 5, start 0, select index 7: start moves to index 3."""
        start = traversal.adjust_viewport(sequence, sequence[0], sequence[7], 5)
        assert start == sequence[3]

    def test_scrolls_up_to_selection(self, sequence):
        """A selection above the viewport becomes the first row."""
        start = traversal.adjust_viewport(sequence, sequence[10], sequence[4], 5)
        assert start == sequence[4]

    def test_unchanged_when_selection_on_screen(self, sequence):
        start = traversal.adjust_viewport(sequence, sequence[2], sequence[6], 5)
        assert start == sequence[2]

    def test_selection_on_last_row_keeps_start(self, sequence):
        """Index difference page_size - 1 still fits."""
        start = traversal.adjust_viewport(sequence, sequence[0], sequence[4], 5)
        assert start == sequence[0]

    def test_page_size_below_one_treated_as_one(self, sequence):
        start = traversal.adjust_viewport(sequence, sequence[0], sequence[9], 0)
        assert start == sequence[9]

    def test_selection_always_within_window(self, sequence):
        """For any start and selection the selection ends up inside the window."""
        for page_size in (1, 3, 7):
            for start_idx in range(len(sequence)):
                for sel_idx in range(len(sequence)):
                    start = traversal.adjust_viewport(
                        sequence, sequence[start_idx], sequence[sel_idx], page_size
                    )
                    offset = sel_idx - sequence.index(start)
                    assert 0 <= offset < page_size

    def test_node_not_in_sequence_raises(self, sequence):
        with pytest.raises(ValueError):
            traversal.adjust_viewport(sequence[:3], sequence[0], sequence[9], 5)
