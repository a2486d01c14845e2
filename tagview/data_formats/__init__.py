"""
Data formats module for loading decoded tag datasets.

This module provides a unified interface for reading tag datasets from JSON,
JSONL and Parquet files and normalizing them into TagRecords.

Usage:
    from tagview.data_formats import get_loader, normalize_record

    # Auto-detect format and get appropriate loader
    loader = get_loader("study.jsonl")
    for i, dataset in enumerate(loader.load("study.jsonl")):
        record = normalize_record(dataset, loader.format_name, f"study.jsonl[{i}]")
        print(record.name, len(record))
"""

from tagview.data_formats.base import DataLoader
from tagview.data_formats.directory_loader import (
    SUPPORTED_EXTENSIONS,
    discover_data_files,
    format_file_size,
)
from tagview.data_formats.format_detector import (
    EXTENSION_MAP,
    SUPPORTED_FORMATS,
    detect_format,
    get_loader,
    get_loader_for_format,
)
from tagview.data_formats.json_loader import JSONLoader
from tagview.data_formats.jsonl_loader import JSONLLoader
from tagview.data_formats.parquet_loader import ParquetLoader
from tagview.data_formats.tag_normalizer import (
    normalize_json_element,
    normalize_record,
    normalize_table_row,
)

__all__ = [
    # Base class
    "DataLoader",
    # Format detection
    "detect_format",
    "get_loader",
    "get_loader_for_format",
    "EXTENSION_MAP",
    "SUPPORTED_FORMATS",
    # Directory scanning
    "discover_data_files",
    "format_file_size",
    "SUPPORTED_EXTENSIONS",
    # Normalization
    "normalize_record",
    "normalize_json_element",
    "normalize_table_row",
    # Loaders
    "JSONLLoader",
    "JSONLoader",
    "ParquetLoader",
]
