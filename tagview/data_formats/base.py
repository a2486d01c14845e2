"""
Abstract base class for tag dataset loaders.

Loaders read raw datasets from a file and yield them as dictionaries. They do
not decode values: turning a raw dataset into a TagRecord is the job of
tag_normalizer, which knows the per-format layout.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator


class DataLoader(ABC):
    """Abstract base class for loading raw tag datasets.

    All format-specific loaders (JSON, JSONL, Parquet) inherit from this
    class and implement the abstract members.
    """

    # Progress update frequency (every N datasets)
    PROGRESS_UPDATE_FREQUENCY: int = 100

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the format name (e.g., 'jsonl', 'json', 'parquet')."""
        pass

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions (e.g., ['.jsonl'])."""
        pass

    @abstractmethod
    def load(self, filename: str) -> Iterator[dict[str, Any]]:
        """Lazily load raw datasets from file.

        Args:
            filename: Path to the file.

        Yields:
            Each raw dataset as a dictionary.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file content is not a valid dataset.
        """
        pass

    @abstractmethod
    def get_record_count(self, filename: str) -> int:
        """Get the number of datasets in a file.

        Args:
            filename: Path to the file.

        Returns:
            The number of datasets.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        pass

    def load_all(
        self,
        filename: str,
        max_records: int | None = None,
        progress_callback: Callable[[int, int | None], None] | None = None,
    ) -> list[dict[str, Any]]:
        """Load all raw datasets from file into memory.

        Args:
            filename: Path to the file.
            max_records: Maximum number of datasets to load (None = all).
            progress_callback: Optional callback(loaded_count, total_count) for
                              progress updates. total_count may be None if unknown.

        Returns:
            A list of raw datasets.
        """
        datasets: list[dict[str, Any]] = []

        for i, dataset in enumerate(self.load(filename)):
            if max_records is not None and i >= max_records:
                break
            datasets.append(dataset)
            if progress_callback is not None and i % self.PROGRESS_UPDATE_FREQUENCY == 0:
                progress_callback(i + 1, None)

        if progress_callback is not None:
            progress_callback(len(datasets), len(datasets))

        return datasets
