"""
JSON format data loader.

This module provides the JSONLoader class for files in the DICOM JSON model:
either a single dataset object keyed by tag ("GGGGEEEE") or an array of such
objects.
"""

from __future__ import annotations

import json
from typing import Any, Iterator

from tagview.data_formats.base import DataLoader


class JSONLoader(DataLoader):
    """Data loader for JSON format.

    JSON files can contain either:
    - An array of datasets: [{"00100010": {...}}, {...}, ...]
    - A single dataset: {"00100010": {...}, ...}

    A single dataset is treated as a list with one element.
    """

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "json"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".json"]

    def _load_json_data(self, filename: str) -> list[dict[str, Any]]:
        """Load a JSON file and return its datasets as a list.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file contains invalid JSON.
            ValueError: If the JSON is not an object or array of objects.
        """
        with open(filename, "r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, list):
            for i, item in enumerate(data):
                if not isinstance(item, dict):
                    raise ValueError(
                        f"JSON array item at index {i} is not an object (got {type(item).__name__})"
                    )
            return data

        if isinstance(data, dict):
            return [data]

        raise ValueError(
            f"JSON file must contain an object or array of objects (got {type(data).__name__})"
        )

    def load(self, filename: str) -> Iterator[dict[str, Any]]:
        """Load datasets from a JSON file.

        The whole file is parsed at once; datasets are then yielded one at a
        time.

        Examples:
            >>> loader = JSONLoader()
            >>> for dataset in loader.load("study.json"):
            ...     print(dataset["00100010"]["vr"])
        """
        yield from self._load_json_data(filename)

    def get_record_count(self, filename: str) -> int:
        return len(self._load_json_data(filename))
