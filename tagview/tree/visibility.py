"""
Expansion and selection state for a TreeStore.

The set of open nodes always satisfies one invariant: if a node is open, all
of its ancestors are open too. Closing a node therefore cannot leave open
descendants behind. Instead, the open descendants are moved into a memo keyed
by the closed node and restored when that node is opened again, so a plain
close/open cycle brings back the previous expansion of the whole subtree.
"""

from __future__ import annotations

from tagview.tree.store import NodeId, TreeStore


class VisibilityState:
    """Open set, current selection and viewport start of one tree.

    Attributes:
        selected: The currently selected node.
        viewport_start: The topmost node drawn by the renderer.
    """

    def __init__(self, store: TreeStore) -> None:
        self._store = store
        self._open: set[NodeId] = set()
        self._memo: dict[NodeId, frozenset[NodeId]] = {}
        self.selected: NodeId = store.root
        self.viewport_start: NodeId = store.root

    @property
    def store(self) -> TreeStore:
        return self._store

    @property
    def open_ids(self) -> frozenset[NodeId]:
        return frozenset(self._open)

    def is_open(self, node_id: NodeId) -> bool:
        self._store.node(node_id)
        return node_id in self._open

    def is_visible(self, node_id: NodeId) -> bool:
        """True if every strict ancestor of the node is open."""
        return all(a in self._open for a in self._store.ancestors(node_id))

    def open(self, node_id: NodeId) -> None:
        """Open a node and every ancestor up to the root. Idempotent."""
        self._insert(node_id)
        for ancestor in self._store.ancestors(node_id):
            self._insert(ancestor)

    def close(self, node_id: NodeId) -> None:
        """Close one level, remembering the expansion below it."""
        self._store.node(node_id)
        if node_id not in self._open:
            self._close_remembered(node_id)
            return

        remembered = self._open_descendants(node_id)
        self._open.discard(node_id)
        self._open.difference_update(remembered)
        if remembered:
            self._memo[node_id] = frozenset(remembered)

    def toggle(self, node_id: NodeId) -> None:
        if self.is_open(node_id):
            self.close(node_id)
        else:
            self.open(node_id)

    def expand_recursive(self, node_id: NodeId) -> None:
        """Open the node and every descendant that has children."""
        if not self._store.has_children(node_id):
            return
        self.open(node_id)
        stack = list(self._store.children(node_id))
        while stack:
            current = stack.pop()
            children = self._store.children(current)
            if children:
                self._insert(current)
                stack.extend(children)

    def collapse_recursive(self, node_id: NodeId) -> None:
        """Close the node and every descendant, dropping any remembered state."""
        subtree = {node_id}
        stack = list(self._store.children(node_id))
        while stack:
            current = stack.pop()
            subtree.add(current)
            stack.extend(self._store.children(current))
        self._open.difference_update(subtree)
        self._forget(subtree)

    def _insert(self, node_id: NodeId) -> None:
        self._store.node(node_id)
        if node_id in self._open:
            return
        self._open.add(node_id)
        remembered = self._memo.pop(node_id, None)
        if remembered:
            self._open.update(remembered)

    def _open_descendants(self, node_id: NodeId) -> list[NodeId]:
        # Open descendants are only reachable through open parents.
        found: list[NodeId] = []
        stack = list(self._store.children(node_id))
        while stack:
            current = stack.pop()
            if current in self._open:
                found.append(current)
                stack.extend(self._store.children(current))
        return found

    def _close_remembered(self, node_id: NodeId) -> None:
        # A hidden node may still be remembered as open by a closed ancestor.
        for key, remembered in list(self._memo.items()):
            if node_id not in remembered:
                continue
            below = frozenset(
                n for n in remembered if node_id in self._store.ancestors(n)
            )
            rest = remembered - below - {node_id}
            if rest:
                self._memo[key] = rest
            else:
                del self._memo[key]
            if below:
                self._memo[node_id] = below

    def _forget(self, node_ids: set[NodeId]) -> None:
        for key in list(self._memo):
            if key in node_ids:
                del self._memo[key]
                continue
            remaining = self._memo[key] - node_ids
            if remaining:
                self._memo[key] = remaining
            else:
                del self._memo[key]
