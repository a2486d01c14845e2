"""
Format detection utilities for tag dataset files.

This module provides functions to detect file formats and get appropriate loaders.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tagview.data_formats.base import DataLoader


# Mapping of file extensions to format names
EXTENSION_MAP: dict[str, str] = {
    ".jsonl": "jsonl",
    ".json": "json",
    ".parquet": "parquet",
    ".pq": "parquet",
}

# Supported format names
SUPPORTED_FORMATS = frozenset(["jsonl", "json", "parquet"])


def detect_format(filename: str) -> str:
    """Detect file format from extension or content.

    Args:
        filename: Path to the file.

    Returns:
        Format name: "jsonl", "json", or "parquet"

    Raises:
        ValueError: If the format cannot be determined or is unsupported.

    Examples:
        >>> detect_format("study.jsonl")
        'jsonl'
        >>> detect_format("tags.pq")
        'parquet'
    """
    extension = Path(filename).suffix.lower()

    if extension in EXTENSION_MAP:
        return EXTENSION_MAP[extension]

    # Content sniffing for files without a known extension
    path = Path(filename)
    if path.is_file():
        try:
            with open(filename, "rb") as f:
                if f.read(4) == b"PAR1":
                    return "parquet"
        except OSError:
            pass

        # A JSON array, or a single object spread over several lines, is JSON;
        # an object that ends on its first line is JSONL.
        try:
            with open(filename, "r", encoding="utf-8") as f:
                head = f.read(4096)
        except (OSError, UnicodeDecodeError):
            head = ""
        stripped = head.lstrip()
        if stripped.startswith("["):
            return "json"
        if stripped.startswith("{"):
            first_line = stripped.split("\n", 1)[0].rstrip()
            return "jsonl" if first_line.endswith("}") else "json"

    raise ValueError(
        f"Unsupported file format for '{filename}'. "
        f"Supported extensions: {', '.join(sorted(EXTENSION_MAP.keys()))}"
    )


def get_loader_for_format(format_name: str) -> "DataLoader":
    """Get a loader for a specific format name.

    Args:
        format_name: The format name ("jsonl", "json", or "parquet").

    Returns:
        A DataLoader instance for the specified format.

    Raises:
        ValueError: If the format name is not supported.
    """
    # Import loaders here to avoid circular imports
    from tagview.data_formats.json_loader import JSONLoader
    from tagview.data_formats.jsonl_loader import JSONLLoader
    from tagview.data_formats.parquet_loader import ParquetLoader

    if format_name not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported format '{format_name}'. "
            f"Supported formats: {', '.join(sorted(SUPPORTED_FORMATS))}"
        )

    loaders: dict[str, DataLoader] = {
        "jsonl": JSONLLoader(),
        "json": JSONLoader(),
        "parquet": ParquetLoader(),
    }

    return loaders[format_name]


def get_loader(filename: str, input_format: str = "auto") -> "DataLoader":
    """Factory function to get the appropriate loader for a file.

    Args:
        filename: Path to the file.
        input_format: Format name, or "auto" to detect it from the file.

    Returns:
        A DataLoader instance appropriate for the file format.

    Raises:
        ValueError: If the format cannot be determined or is unsupported.
    """
    if input_format == "auto":
        input_format = detect_format(filename)
    return get_loader_for_format(input_format)
