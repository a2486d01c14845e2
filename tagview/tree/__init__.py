"""
Tree storage and navigation engine.

Usage:
    from tagview.tree import compute_statistics, build_tree, SortMode, TreeNavigator

    stats = compute_statistics(records)
    store, state = build_tree(SortMode.TAG_DIFF, "study/", records, stats)
    navigator = TreeNavigator(store, state)
    navigator.select_next(3)
    rows = navigator.visible_window(page_size=40)
"""

from tagview.tree.aggregator import (
    TagStatistics,
    TagStats,
    compute_statistics,
    merge_statistics,
)
from tagview.tree.builders import (
    SortMode,
    build_by_key_merged,
    build_by_source_order,
    build_tree,
)
from tagview.tree.navigator import TreeNavigator, WindowRow
from tagview.tree.store import Node, NodeId, TreeStore, UnknownNodeError, create_root
from tagview.tree.visibility import VisibilityState

__all__ = [
    # Store
    "Node",
    "NodeId",
    "TreeStore",
    "UnknownNodeError",
    "create_root",
    # State
    "VisibilityState",
    # Navigation
    "TreeNavigator",
    "WindowRow",
    # Aggregation
    "TagStatistics",
    "TagStats",
    "compute_statistics",
    "merge_statistics",
    # Builders
    "SortMode",
    "build_by_source_order",
    "build_by_key_merged",
    "build_tree",
]
