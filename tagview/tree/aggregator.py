"""
Per-tag statistics across a batch of records.

The merged builder needs to know, for every tag, how many distinct values
the records hold (to hide tags that are identical everywhere) and how wide
values get (to align the record column of its leaves).

Statistics are built once per loaded batch and are immutable afterwards.
Partial results over disjoint shards combine with ``merge_statistics``,
which is plain set union and therefore order independent.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from tagview.config import PLACEHOLDER_WIDTH
from tagview.records import UNDEFINED_LENGTH, TagKey, TagRecord


@dataclass(frozen=True)
class TagStats:
    """Distinct rendered values and byte lengths seen for one tag."""

    values: frozenset[str]
    lengths: frozenset[int]

    @property
    def distinct_value_count(self) -> int:
        return len(self.values)

    @property
    def distinct_lengths(self) -> frozenset[int]:
        return self.lengths

    @property
    def has_undefined_length(self) -> bool:
        return UNDEFINED_LENGTH in self.lengths

    @property
    def max_length(self) -> int | None:
        defined = [n for n in self.lengths if n != UNDEFINED_LENGTH]
        return max(defined) if defined else None

    def pad_width(self, placeholder: int = PLACEHOLDER_WIDTH) -> int | None:
        """Column width for this tag's values.

        Returns:
            None when all values share one length (no padding needed),
            ``placeholder`` when lengths vary and one is undefined,
            otherwise the largest length seen.
        """
        if len(self.lengths) <= 1:
            return None
        if self.has_undefined_length:
            return placeholder
        return self.max_length

    def union(self, other: "TagStats") -> "TagStats":
        return TagStats(self.values | other.values, self.lengths | other.lengths)


class TagStatistics(Mapping[TagKey, TagStats]):
    """Read-only mapping of tag key to TagStats."""

    def __init__(self, stats: Mapping[TagKey, TagStats] | None = None) -> None:
        self._stats: dict[TagKey, TagStats] = dict(stats or {})

    def __getitem__(self, key: TagKey) -> TagStats:
        return self._stats[key]

    def __iter__(self) -> Iterator[TagKey]:
        return iter(self._stats)

    def __len__(self) -> int:
        return len(self._stats)

    def __repr__(self) -> str:
        return f"TagStatistics({len(self._stats)} tags)"

    def differing_keys(self, min_diff_threshold: int = 1) -> list[TagKey]:
        """Keys whose distinct value count exceeds the threshold, sorted."""
        return sorted(
            key for key, stats in self._stats.items()
            if stats.distinct_value_count > min_diff_threshold
        )


def compute_statistics(records: Iterable[TagRecord]) -> TagStatistics:
    """Collect distinct values and lengths per tag over all records.

    Only records that contain a tag contribute to its statistics.

    Args:
        records: Decoded records.

    Returns:
        The per-tag statistics.

    Examples:
        >>> stats = compute_statistics(records)
        >>> stats[TagKey(0x0010, 0x0010)].distinct_value_count
        3
    """
    values: dict[TagKey, set[str]] = {}
    lengths: dict[TagKey, set[int]] = {}
    for record in records:
        for element in record.elements:
            values.setdefault(element.key, set()).add(element.value)
            lengths.setdefault(element.key, set()).add(element.length)

    return TagStatistics({
        key: TagStats(frozenset(values[key]), frozenset(lengths[key]))
        for key in values
    })


def merge_statistics(*parts: TagStatistics) -> TagStatistics:
    """Union statistics computed over disjoint shards of one batch."""
    merged: dict[TagKey, TagStats] = {}
    for part in parts:
        for key, stats in part.items():
            current = merged.get(key)
            merged[key] = stats if current is None else current.union(stats)
    return TagStatistics(merged)
