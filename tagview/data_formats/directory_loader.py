"""
Directory scanning utilities for discovering tag dataset files.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tagview.data_formats.format_detector import EXTENSION_MAP

logger = logging.getLogger(__name__)

# Supported file extensions (derived from EXTENSION_MAP)
SUPPORTED_EXTENSIONS = frozenset(EXTENSION_MAP.keys())


def discover_data_files(directory: str) -> list[dict]:
    """
    Discover all supported data files directly inside a directory.

    Subdirectories are not descended into.

    Args:
        directory: Path to the directory to scan.

    Returns:
        List of dicts sorted by name (case-insensitive) with:
        - path: absolute path to file
        - name: filename
        - format: detected format (jsonl, json, parquet)
        - size: file size in bytes
    """
    dir_path = Path(directory)
    files = []

    # Extensions are matched case-insensitively (glob is case-sensitive on Linux)
    try:
        for file_path in dir_path.iterdir():
            if not file_path.is_file():
                continue

            ext_lower = file_path.suffix.lower()
            if ext_lower not in EXTENSION_MAP:
                logger.debug("Skipping unsupported file %s", file_path)
                continue

            try:
                files.append({
                    "path": str(file_path.absolute()),
                    "name": file_path.name,
                    "format": EXTENSION_MAP[ext_lower],
                    "size": file_path.stat().st_size,
                })
            except OSError:
                logger.warning("Cannot stat %s, skipping", file_path)
                continue
    except OSError as e:
        logger.warning("Cannot read directory %s: %s", directory, e)
        return []

    return sorted(files, key=lambda f: f["name"].lower())


def format_file_size(size_bytes: float) -> str:
    """Format file size for display (e.g., '1.2 MB')."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"
