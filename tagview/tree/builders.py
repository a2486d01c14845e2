"""
Tree builders turning decoded records into navigable trees.

Two layouts are supported:

    - Source order: one subtree per record, tags grouped by group number in
      the order the record lists them.
    - By tag, merged: one subtree per group across all records, one node per
      tag, and one leaf per record holding that tag. A threshold on the
      number of distinct values hides tags that do not differ enough.

Every build returns a fresh (TreeStore, VisibilityState) pair; trees are never
edited after construction.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Sequence

from tagview.config import DEFAULT_CONFIG, ViewerConfig
from tagview.records import TagElement, TagKey, TagRecord
from tagview.tree.aggregator import TagStatistics
from tagview.tree.store import NodeId, TreeStore
from tagview.tree.visibility import VisibilityState

logger = logging.getLogger(__name__)


class SortMode(Enum):
    """Tree layouts selectable by the user."""

    SOURCE = "source"
    TAG = "tag"
    TAG_DIFF = "diff"

    @property
    def min_diff_threshold(self) -> int:
        return 1 if self is SortMode.TAG_DIFF else 0

    @property
    def description(self) -> str:
        return _MODE_DESCRIPTIONS[self]


_MODE_DESCRIPTIONS = {
    SortMode.SOURCE: "sorted by filename",
    SortMode.TAG: "sorted by tag",
    SortMode.TAG_DIFF: "sorted by tag, displaying only different tags",
}


def truncate(text: str, max_len: int) -> str:
    """
    Truncate text to a maximum length, adding ellipsis if truncated.

    Examples:
        >>> truncate("Hello, World!", 10)
        'Hello, ...'
        >>> truncate("Short", 10)
        'Short'
    """
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."


# Line breaks shown inline so every node occupies exactly one screen row
LINE_BREAK_MARK = "\u2424"

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")

_CONTROL_CHARS = {code: " " for code in (*range(0x20), 0x7F)}


def flatten(text: str) -> str:
    """
    Fold text onto a single line.

    Line breaks (CRLF, CR or LF) become LINE_BREAK_MARK, other control
    characters such as tabs become spaces.

    Examples:
        >>> flatten("line1\\r\\nline2\\tend")
        'line1\u2424line2 end'
    """
    return _LINE_BREAKS.sub(LINE_BREAK_MARK, text).translate(_CONTROL_CHARS)


def group_label(group: int) -> str:
    return f"{group:04x}"


def tag_label(element: TagElement) -> str:
    return f"{element.element:04x} {flatten(element.name)}".rstrip()


def element_label(element: TagElement, config: ViewerConfig = DEFAULT_CONFIG) -> str:
    """Leaf label for source order: ``"eeee Name (VR): value"``."""
    value = flatten(element.value)
    if not element.has_undefined_length and element.length >= config.max_value_length:
        value = truncate(value, config.max_value_length)
    return f"{tag_label(element)} ({element.vr}): {value}"


def merged_leaf_label(
    element: TagElement,
    record_name: str,
    pad_width: int | None,
    config: ViewerConfig = DEFAULT_CONFIG,
) -> str:
    """Leaf label for the merged layout: ``"<value padded> | <record>"``."""
    cell = truncate(flatten(element.value), config.merged_value_width)
    if pad_width is not None:
        cell = cell.ljust(min(pad_width, config.merged_value_width))
    return f"{cell} | {flatten(record_name)}"


def build_by_source_order(
    root_label: str,
    records: Sequence[TagRecord],
    config: ViewerConfig = DEFAULT_CONFIG,
) -> tuple[TreeStore, VisibilityState]:
    """Build one subtree per record, preserving each record's tag order.

    A single record is attached to the root directly, and the root then
    carries the record's name.

    Args:
        root_label: Label of the root (typically the input path).
        records: Decoded records.
        config: Label formatting settings.

    Returns:
        The tree and its initial state, with only the root open.
    """
    if len(records) == 1:
        store = TreeStore(flatten(records[0].name))
        _add_record(store, store.root, records[0], config)
    else:
        store = TreeStore(root_label)
        for record in records:
            record_node = store.add_child(store.root, flatten(record.name))
            _add_record(store, record_node, record, config)

    state = VisibilityState(store)
    state.open(store.root)
    logger.debug("Built source-order tree: %d records, %d nodes", len(records), len(store))
    return store, state


def _add_record(
    store: TreeStore,
    record_node: NodeId,
    record: TagRecord,
    config: ViewerConfig,
) -> None:
    current_group: int | None = None
    group_node = record_node
    for element in record.elements:
        if element.group != current_group:
            current_group = element.group
            group_node = store.add_child(record_node, group_label(element.group))
        store.add_child(group_node, element_label(element, config))


def build_by_key_merged(
    root_label: str,
    records: Sequence[TagRecord],
    stats: TagStatistics,
    min_diff_threshold: int,
    config: ViewerConfig = DEFAULT_CONFIG,
) -> tuple[TreeStore, VisibilityState]:
    """Build one group/tag subtree across all records.

    Group nodes are created on first sight of a group, so a group may end up
    without tag nodes when all of its tags are filtered out. A tag node is
    created only when its distinct value count exceeds ``min_diff_threshold``;
    it is labelled from the first record holding the tag and receives one
    leaf per record holding it.

    Fewer than two records fall back to build_by_source_order().

    Args:
        root_label: Label of the root.
        records: Decoded records.
        stats: Statistics over the same records (see compute_statistics()).
        min_diff_threshold: 0 shows every tag, 1 only tags that differ.
        config: Label formatting settings.

    Returns:
        The tree and its initial state, with the root and all group nodes open.
    """
    if len(records) < 2:
        return build_by_source_order(root_label, records, config)

    store = TreeStore(root_label)
    group_nodes: dict[int, NodeId] = {}
    tag_nodes: dict[TagKey, NodeId] = {}

    for record in records:
        for element in record.elements:
            group_node = group_nodes.get(element.group)
            if group_node is None:
                group_node = store.add_child(store.root, group_label(element.group))
                group_nodes[element.group] = group_node

            tag_stats = stats[element.key]
            if tag_stats.distinct_value_count <= min_diff_threshold:
                continue

            tag_node = tag_nodes.get(element.key)
            if tag_node is None:
                tag_node = store.add_child(group_node, tag_label(element))
                tag_nodes[element.key] = tag_node

            pad_width = tag_stats.pad_width(config.placeholder_width)
            store.add_child(
                tag_node, merged_leaf_label(element, record.name, pad_width, config)
            )

    state = VisibilityState(store)
    state.open(store.root)
    for group_node in group_nodes.values():
        state.open(group_node)

    logger.debug(
        "Built merged tree: %d records, %d groups, %d tags shown (threshold %d)",
        len(records),
        len(group_nodes),
        len(tag_nodes),
        min_diff_threshold,
    )
    return store, state


def build_tree(
    mode: SortMode,
    root_label: str,
    records: Sequence[TagRecord],
    stats: TagStatistics,
    config: ViewerConfig = DEFAULT_CONFIG,
) -> tuple[TreeStore, VisibilityState]:
    """Build the tree for a sort mode."""
    if mode is SortMode.SOURCE:
        return build_by_source_order(root_label, records, config)
    return build_by_key_merged(
        root_label, records, stats, mode.min_diff_threshold, config
    )
