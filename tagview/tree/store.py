"""
Arena-based tree storage.

Nodes live in a flat arena and refer to each other only through integer
NodeIds. A TreeStore is built once per sort mode and never edited afterwards,
so ids are allocated sequentially and never reused.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, NewType

if TYPE_CHECKING:
    from tagview.tree.visibility import VisibilityState


NodeId = NewType("NodeId", int)


class UnknownNodeError(LookupError):
    """Raised when a NodeId does not belong to the TreeStore it is used with.

    This always indicates a bug in the caller, never a user condition.
    """

    def __init__(self, node_id: object) -> None:
        self.node_id = node_id
        super().__init__(f"Node {node_id!r} does not exist in this tree")


@dataclass
class Node:
    """A single entry of the tree.

    Attributes:
        label: Display text.
        parent: Id of the parent node, None for the root.
        position: Index of this node in its parent's children list.
        children: Child ids in display order.
    """

    label: str
    parent: NodeId | None = None
    position: int = 0
    children: list[NodeId] = field(default_factory=list)


class TreeStore:
    """Owns every node of one tree, keyed by NodeId.

    Example:
        >>> store = TreeStore("root")
        >>> child = store.add_child(store.root, "0008")
        >>> store.parent(child) == store.root
        True
    """

    def __init__(self, root_label: str) -> None:
        self._nodes: list[Node] = [Node(root_label)]
        self.root: NodeId = NodeId(0)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self._nodes)

    def __iter__(self) -> Iterator[NodeId]:
        return (NodeId(i) for i in range(len(self._nodes)))

    def node(self, node_id: NodeId) -> Node:
        """Return the node for an id.

        Raises:
            UnknownNodeError: If the id is not part of this tree.
        """
        if node_id not in self:
            raise UnknownNodeError(node_id)
        return self._nodes[node_id]

    def add_child(self, parent_id: NodeId, label: str) -> NodeId:
        """Append a new node as the last child of ``parent_id``.

        Args:
            parent_id: Existing node that receives the child.
            label: Display text of the new node.

        Returns:
            The id of the new node.

        Raises:
            UnknownNodeError: If ``parent_id`` is not part of this tree.
        """
        parent = self.node(parent_id)
        child_id = NodeId(len(self._nodes))
        self._nodes.append(Node(label, parent=parent_id, position=len(parent.children)))
        parent.children.append(child_id)
        return child_id

    def label(self, node_id: NodeId) -> str:
        return self.node(node_id).label

    def children(self, node_id: NodeId) -> tuple[NodeId, ...]:
        return tuple(self.node(node_id).children)

    def has_children(self, node_id: NodeId) -> bool:
        return bool(self.node(node_id).children)

    def child_count(self, node_id: NodeId) -> int:
        return len(self.node(node_id).children)

    def child_at(self, node_id: NodeId, index: int) -> NodeId | None:
        """Return the child at ``index`` (negative counts from the end), or None."""
        children = self.node(node_id).children
        if -len(children) <= index < len(children):
            return children[index]
        return None

    def parent(self, node_id: NodeId) -> NodeId | None:
        return self.node(node_id).parent

    def position(self, node_id: NodeId) -> int:
        return self.node(node_id).position

    def ancestors(self, node_id: NodeId, root_first: bool = False) -> list[NodeId]:
        """Return the strict ancestors of a node.

        Args:
            node_id: The node to start from (not included in the result).
            root_first: Order from root down instead of from the parent up.

        Returns:
            Ancestor ids; empty for the root.
        """
        chain: list[NodeId] = []
        current = self.node(node_id).parent
        while current is not None:
            chain.append(current)
            current = self._nodes[current].parent
        if root_first:
            chain.reverse()
        return chain

    def level(self, node_id: NodeId) -> int:
        """Number of ancestors between the node and the root (root is 0)."""
        depth = 0
        current = self.node(node_id).parent
        while current is not None:
            depth += 1
            current = self._nodes[current].parent
        return depth

    def path_labels(self, node_id: NodeId) -> list[str]:
        """Labels from the root down to and including ``node_id``."""
        chain = self.ancestors(node_id, root_first=True)
        chain.append(node_id)
        return [self._nodes[i].label for i in chain]

    def check_integrity(self) -> None:
        """Verify the rooted-tree invariant.

        Raises:
            AssertionError: If any parent/child link is inconsistent or a
                node is unreachable from the root.
        """
        root = self._nodes[self.root]
        if root.parent is not None:
            raise AssertionError("Root must not have a parent")

        seen: set[int] = set()
        stack: list[NodeId] = [self.root]
        while stack:
            current = stack.pop()
            if current in seen:
                raise AssertionError(f"Node {current} reached twice")
            seen.add(current)
            node = self._nodes[current]
            for index, child_id in enumerate(node.children):
                child = self._nodes[child_id]
                if child.parent != current or child.position != index:
                    raise AssertionError(
                        f"Node {child_id} is not linked back to parent {current}"
                    )
                stack.append(child_id)

        if len(seen) != len(self._nodes):
            raise AssertionError(
                f"{len(self._nodes) - len(seen)} node(s) unreachable from root"
            )


def create_root(label: str) -> tuple[TreeStore, "VisibilityState"]:
    """Create a one-node tree with its visibility state.

    Both the selection and the viewport start point at the root.
    """
    from tagview.tree.visibility import VisibilityState

    store = TreeStore(label)
    return store, VisibilityState(store)
