"""
Traversal functions over a TreeStore and its VisibilityState.

All functions here are pure: they read the store and the open set but never
modify either. "Visible" traversal only descends into open nodes; passing
``only_open=False`` (or ``state=None`` for the iterators) walks the full tree,
which is what recursive operations and search need.

Every walk is iterative, so deep trees cannot exhaust the interpreter stack.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from tagview.tree.store import NodeId, TreeStore
from tagview.tree.visibility import VisibilityState


def next_sibling(store: TreeStore, node_id: NodeId) -> NodeId | None:
    parent = store.parent(node_id)
    if parent is None:
        return None
    return store.child_at(parent, store.position(node_id) + 1)


def prev_sibling(store: TreeStore, node_id: NodeId) -> NodeId | None:
    parent = store.parent(node_id)
    if parent is None:
        return None
    position = store.position(node_id)
    if position == 0:
        return None
    return store.child_at(parent, position - 1)


def level(store: TreeStore, node_id: NodeId) -> int:
    return store.level(node_id)


def next_visible(
    store: TreeStore,
    state: VisibilityState,
    node_id: NodeId,
    only_open: bool = True,
) -> NodeId | None:
    """Return the node after ``node_id`` in pre-order.

    Descends into the first child when the node is open (or when
    ``only_open`` is False). Otherwise climbs until some ancestor-or-self
    has a next sibling.

    Args:
        store: The tree.
        state: Supplies the open set.
        node_id: Starting node.
        only_open: Honour the open set; False walks the full tree.

    Returns:
        The next node, or None at the end of the tree.
    """
    if store.has_children(node_id) and (not only_open or state.is_open(node_id)):
        return store.child_at(node_id, 0)

    current: NodeId | None = node_id
    while current is not None:
        sibling = next_sibling(store, current)
        if sibling is not None:
            return sibling
        current = store.parent(current)
    return None


def prev_visible(
    store: TreeStore,
    state: VisibilityState,
    node_id: NodeId,
    only_open: bool = True,
) -> NodeId | None:
    """Return the node before ``node_id`` in pre-order.

    The previous sibling's deepest last descendant (following only open
    nodes unless ``only_open`` is False), or the parent when ``node_id`` is
    a first child. None for the root.
    """
    parent = store.parent(node_id)
    if parent is None:
        return None

    sibling = prev_sibling(store, node_id)
    if sibling is None:
        return parent

    current = sibling
    while store.has_children(current) and (not only_open or state.is_open(current)):
        current = store.child_at(current, -1)
    return current


def iter_preorder(
    store: TreeStore,
    start: NodeId | None = None,
    state: VisibilityState | None = None,
) -> Iterator[NodeId]:
    """Yield ``start`` and its descendants in pre-order.

    Args:
        store: The tree.
        start: Subtree root, defaults to the tree root.
        state: When given, only open nodes are descended into.
    """
    start = store.root if start is None else start
    open_ids = state.open_ids if state is not None else None
    stack: list[NodeId] = [start]
    while stack:
        current = stack.pop()
        yield current
        children = store.children(current)
        if children and (open_ids is None or current in open_ids):
            stack.extend(reversed(children))


def visible_sequence(store: TreeStore, state: VisibilityState) -> list[NodeId]:
    """Rows a renderer draws for a fully unscrolled tree, top to bottom."""
    return list(iter_preorder(store, store.root, state))


def descendants(store: TreeStore, node_id: NodeId) -> list[NodeId]:
    """All descendants of a node, pre-order, ignoring the open set."""
    walk = iter_preorder(store, node_id)
    next(walk)
    return list(walk)


def nearest_visible(store: TreeStore, state: VisibilityState, node_id: NodeId) -> NodeId:
    """Return ``node_id`` if it is visible, else its topmost closed ancestor.

    The topmost closed ancestor is the deepest ancestor that is still visible.
    """
    for ancestor in store.ancestors(node_id, root_first=True):
        if not state.is_open(ancestor):
            return ancestor
    return node_id


def adjust_viewport(
    sequence: Sequence[NodeId],
    viewport_start: NodeId,
    selected: NodeId,
    page_size: int,
) -> NodeId:
    """Compute the viewport start that keeps ``selected`` on screen.

    Scrolls up so the selection becomes the first row when it lies above
    the viewport, scrolls down just enough to make it the last row when it
    lies ``page_size`` or more rows below the start, and otherwise keeps the
    current start.

    Args:
        sequence: The visible sequence (see visible_sequence()).
        viewport_start: Current topmost node; must be in ``sequence``.
        selected: Current selection; must be in ``sequence``.
        page_size: Rows available. Values below 1 are treated as 1.

    Returns:
        The new viewport start.

    Raises:
        ValueError: If either node is not in ``sequence``.
    """
    page_size = max(page_size, 1)
    start_idx = sequence.index(viewport_start)
    sel_idx = sequence.index(selected)
    if sel_idx < start_idx:
        return selected
    if sel_idx - start_idx >= page_size:
        return sequence[sel_idx - (page_size - 1)]
    return viewport_start
