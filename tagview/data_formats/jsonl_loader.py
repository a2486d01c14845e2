"""
JSONL format data loader.

This module provides the JSONLLoader class for JSON Lines files where each
line holds one dataset in the DICOM JSON model.
"""

from __future__ import annotations

import json
from typing import Any, Iterator

from tagview.data_formats.base import DataLoader


class JSONLLoader(DataLoader):
    """Data loader for JSONL (JSON Lines) format.

    Blank lines are skipped. Every other line must be a JSON object.
    """

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "jsonl"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".jsonl"]

    def load(self, filename: str) -> Iterator[dict[str, Any]]:
        """Lazily load datasets from a JSONL file.

        Args:
            filename: Path to the JSONL file.

        Yields:
            Each dataset as a dictionary.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If a line contains invalid JSON.
            ValueError: If a line holds JSON that is not an object.
        """
        with open(filename, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                data = json.loads(line)
                if not isinstance(data, dict):
                    raise ValueError(
                        f"Line {line_number} is not a JSON object (got {type(data).__name__})"
                    )
                yield data

    def get_record_count(self, filename: str) -> int:
        """Count non-empty lines without parsing them."""
        count = 0
        with open(filename, "r", encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    count += 1
        return count
