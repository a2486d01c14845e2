"""
Navigation session over one built tree.

TreeNavigator is the only object the UI talks to after a tree is built: it
turns user commands into selection and expansion changes and hands the
renderer a bounded window of rows. Every command returns True when it
changed something and False when it was a no-op at a structural boundary;
none of them raise for boundary conditions.
"""

from __future__ import annotations

from dataclasses import dataclass

from tagview.tree import traversal
from tagview.tree.store import NodeId, TreeStore
from tagview.tree.visibility import VisibilityState


@dataclass(frozen=True)
class WindowRow:
    """One row of the rendered viewport."""

    node_id: NodeId
    level: int
    label: str
    is_selected: bool
    has_children: bool
    is_open: bool


class TreeNavigator:
    """Selection movement, expansion commands and viewport for one tree.

    Attributes:
        store: The tree being browsed.
        state: Its open set, selection and viewport start.
    """

    def __init__(self, store: TreeStore, state: VisibilityState) -> None:
        self.store = store
        self.state = state

    @property
    def selected(self) -> NodeId:
        return self.state.selected

    def _select(self, node_id: NodeId | None) -> bool:
        if node_id is None or node_id == self.state.selected:
            return False
        self.state.selected = node_id
        return True

    def select(self, node_id: NodeId) -> bool:
        """Select ``node_id``, opening the path to it."""
        parent = self.store.parent(node_id)
        if parent is not None:
            self.state.open(parent)
        return self._select(node_id)

    def _anchor(self) -> NodeId:
        return traversal.nearest_visible(self.store, self.state, self.state.selected)

    # Movement over the visible sequence

    def select_next(self, count: int = 1) -> bool:
        """Move the selection down by up to ``count`` visible rows."""
        current = self._anchor()
        for _ in range(count):
            following = traversal.next_visible(self.store, self.state, current)
            if following is None:
                break
            current = following
        return self._select(current)

    def select_prev(self, count: int = 1) -> bool:
        """Move the selection up by up to ``count`` visible rows."""
        current = self._anchor()
        for _ in range(count):
            preceding = traversal.prev_visible(self.store, self.state, current)
            if preceding is None:
                break
            current = preceding
        return self._select(current)

    def select_first(self) -> bool:
        return self._select(self.store.root)

    def select_last(self) -> bool:
        sequence = traversal.visible_sequence(self.store, self.state)
        return self._select(sequence[-1])

    # Movement between siblings and levels

    def select_next_sibling(self) -> bool:
        return self._select(traversal.next_sibling(self.store, self._anchor()))

    def select_prev_sibling(self) -> bool:
        return self._select(traversal.prev_sibling(self.store, self._anchor()))

    def select_first_sibling(self) -> bool:
        parent = self.store.parent(self._anchor())
        if parent is None:
            return False
        return self._select(self.store.child_at(parent, 0))

    def select_last_sibling(self) -> bool:
        parent = self.store.parent(self._anchor())
        if parent is None:
            return False
        return self._select(self.store.child_at(parent, -1))

    def select_parent(self) -> bool:
        """Move to the parent. Never closes anything."""
        return self._select(self.store.parent(self._anchor()))

    def select_first_child(self) -> bool:
        """Move to the first child, opening the node if it is closed."""
        current = self._anchor()
        first = self.store.child_at(current, 0)
        if first is None:
            return False
        self.state.open(current)
        return self._select(first)

    def expand_or_select_first_child(self) -> bool:
        """Open a closed node, or step into an open one."""
        current = self._anchor()
        if not self.store.has_children(current):
            return False
        if not self.state.is_open(current):
            self.state.open(current)
            return True
        return self._select(self.store.child_at(current, 0))

    def collapse_or_select_parent(self) -> bool:
        """Close an open node, or step out to the parent."""
        current = self._anchor()
        if self.store.has_children(current) and self.state.is_open(current):
            self.state.close(current)
            return True
        return self.select_parent()

    # Expansion commands

    def toggle_selected(self) -> bool:
        current = self._anchor()
        if not self.store.has_children(current):
            return False
        self.state.toggle(current)
        return True

    def expand_selected_recursive(self) -> bool:
        current = self._anchor()
        if not self.store.has_children(current):
            return False
        self.state.expand_recursive(current)
        return True

    def collapse_selected_recursive(self) -> bool:
        current = self._anchor()
        if not self.store.has_children(current):
            return False
        self.state.collapse_recursive(current)
        return True

    def _siblings(self) -> tuple[NodeId, ...]:
        current = self._anchor()
        parent = self.store.parent(current)
        if parent is None:
            return (current,)
        return self.store.children(parent)

    def expand_siblings_of_selected(self) -> bool:
        """Open the selected node and all of its siblings."""
        changed = False
        for sibling in self._siblings():
            if self.store.has_children(sibling) and not self.state.is_open(sibling):
                self.state.open(sibling)
                changed = True
        return changed

    def collapse_siblings_of_selected(self) -> bool:
        """Close the selected node and all of its siblings."""
        changed = False
        for sibling in self._siblings():
            if self.state.is_open(sibling):
                self.state.close(sibling)
                changed = True
        return changed

    # Search

    def search(self, text: str, forward: bool = True, start: NodeId | None = None) -> bool:
        """Select the next node whose label contains ``text``.

        Matching is case-insensitive and covers the whole tree, including
        nodes below closed ones. The search starts after (or before, when
        ``forward`` is False) ``start``, defaulting to the selection, and
        wraps around. The path to the match is opened.

        Args:
            text: Substring to look for; empty text never matches.
            forward: Search direction.
            start: Node to search from.

        Returns:
            True if a different node was selected.
        """
        needle = text.strip().lower()
        if not needle:
            return False

        origin = self.state.selected if start is None else start
        order = list(traversal.iter_preorder(self.store))
        index = order.index(origin)
        step = 1 if forward else -1
        total = len(order)
        for offset in range(1, total + 1):
            candidate = order[(index + step * offset) % total]
            if needle in self.store.label(candidate).lower():
                parent = self.store.parent(candidate)
                if parent is not None:
                    self.state.open(parent)
                if candidate == self.state.selected:
                    return False
                self.state.selected = candidate
                return True
        return False

    # Rendering

    def reconcile(self) -> None:
        """Move a hidden selection or viewport start onto a visible node."""
        self.state.selected = traversal.nearest_visible(
            self.store, self.state, self.state.selected
        )
        self.state.viewport_start = traversal.nearest_visible(
            self.store, self.state, self.state.viewport_start
        )

    def visible_window(self, page_size: int) -> list[WindowRow]:
        """Rows to draw for a viewport of ``page_size`` lines.

        Recomputes the viewport start so the selection stays on screen.
        """
        self.reconcile()
        page_size = max(page_size, 1)
        sequence = traversal.visible_sequence(self.store, self.state)
        self.state.viewport_start = traversal.adjust_viewport(
            sequence, self.state.viewport_start, self.state.selected, page_size
        )
        start = sequence.index(self.state.viewport_start)
        open_ids = self.state.open_ids
        return [
            WindowRow(
                node_id=node_id,
                level=self.store.level(node_id),
                label=self.store.label(node_id),
                is_selected=node_id == self.state.selected,
                has_children=self.store.has_children(node_id),
                is_open=node_id in open_ids,
            )
            for node_id in sequence[start : start + page_size]
        ]

    def selected_path(self) -> list[str]:
        """Labels from the root to the selection."""
        return self.store.path_labels(self.state.selected)
