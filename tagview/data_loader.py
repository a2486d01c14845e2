"""
Record loading for the tag browser.

Turns an input path (a single file or a directory of files) into the list of
TagRecords the tree builders consume. All decoding errors surface here,
before any tree is built.

Record naming:
    - A file holding one dataset names its record after the file.
    - A file holding several datasets names them "file[0]", "file[1]", ...
    - Parquet datasets carry their own name in the "record" column.
"""

from __future__ import annotations

import itertools
import logging
import os
from pathlib import Path
from typing import Callable, Iterator

from tagview.data_formats import (
    discover_data_files,
    format_file_size,
    get_loader,
    normalize_record,
)
from tagview.records import TagRecord

logger = logging.getLogger(__name__)


def input_files(path: str) -> list[str]:
    """Return the data files behind an input path.

    Args:
        path: A data file or a directory of data files.

    Returns:
        File paths; a directory yields its supported files sorted by name.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If a directory holds no supported files.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Path not found: {path}")

    if not os.path.isdir(path):
        return [path]

    files = discover_data_files(path)
    if not files:
        raise ValueError(f"No supported files found in {path}")
    logger.info("Found %d data file(s) in %s", len(files), path)
    return [f["path"] for f in files]


def iter_file_records(filename: str, input_format: str = "auto") -> Iterator[TagRecord]:
    """Lazily decode the records of one file.

    The file is read once: the first two datasets are looked at to decide
    between single and indexed record names.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported or a dataset is malformed.
    """
    loader = get_loader(filename, input_format)
    basename = Path(filename).name
    logger.info(
        "Loading %s as %s (%s)",
        basename,
        loader.format_name,
        format_file_size(os.path.getsize(filename)),
    )

    datasets = loader.load(filename)
    head = list(itertools.islice(datasets, 2))
    if len(head) == 1:
        yield normalize_record(head[0], loader.format_name, basename)
        return

    for i, dataset in enumerate(itertools.chain(head, datasets)):
        yield normalize_record(dataset, loader.format_name, f"{basename}[{i}]")


def iter_records(path: str, input_format: str = "auto") -> Iterator[TagRecord]:
    """Lazily decode every record behind an input path."""
    for filename in input_files(path):
        yield from iter_file_records(filename, input_format)


def load_tag_records(
    path: str,
    input_format: str = "auto",
    progress_callback: Callable[[int, int | None], None] | None = None,
) -> list[TagRecord]:
    """
    Load all records behind an input path into memory.

    Args:
        path: A data file or a directory of data files.
        input_format: Format name, or "auto" to detect per file.
        progress_callback: Optional callback(loaded_count, total_count);
                          total_count is None while unknown.

    Returns:
        The decoded records in file order.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If a file format is unsupported or a dataset is malformed.

    Examples:
        >>> records = load_tag_records("study/")
        >>> print(f"Loaded {len(records)} records")
    """
    records: list[TagRecord] = []
    for i, record in enumerate(iter_records(path, input_format)):
        records.append(record)
        if progress_callback is not None:
            progress_callback(i + 1, None)

    if progress_callback is not None:
        progress_callback(len(records), len(records))

    logger.info("Loaded %d record(s) from %s", len(records), path)
    return records
