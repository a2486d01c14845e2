"""
Parquet format data loader.

Parquet input is a long table with one row per tag:

    record | group | element | vr | value | length | name (optional)

Consecutive rows sharing the same ``record`` value form one dataset. Group
and element may be stored as integers or as hexadecimal strings.
"""

from __future__ import annotations

from typing import Any, Iterator

import pyarrow.parquet as pq

from tagview.data_formats.base import DataLoader


REQUIRED_COLUMNS = ("record", "group", "element", "vr", "value", "length")
OPTIONAL_COLUMNS = ("name",)


class ParquetLoader(DataLoader):
    """Data loader for Apache Parquet tag tables.

    Yields datasets of the form ``{"record": name, "elements": [row, ...]}``
    where each row is a dict with the table's columns.
    """

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "parquet"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".parquet", ".pq"]

    def _check_schema(self, parquet_file: pq.ParquetFile, filename: str) -> list[str]:
        names = parquet_file.schema_arrow.names
        missing = [c for c in REQUIRED_COLUMNS if c not in names]
        if missing:
            raise ValueError(
                f"Parquet file '{filename}' is missing required column(s): {', '.join(missing)}"
            )
        return [c for c in REQUIRED_COLUMNS + OPTIONAL_COLUMNS if c in names]

    def load(self, filename: str) -> Iterator[dict[str, Any]]:
        """Lazily load datasets from a Parquet tag table.

        Reads the file in batches; a dataset may span batch boundaries.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If a required column is missing.
            pyarrow.ArrowInvalid: If the file is not a valid Parquet file.

        Examples:
            >>> loader = ParquetLoader()
            >>> for dataset in loader.load("tags.parquet"):
            ...     print(dataset["record"], len(dataset["elements"]))
        """
        parquet_file = pq.ParquetFile(filename)
        columns = self._check_schema(parquet_file, filename)

        current: dict[str, Any] | None = None
        for batch in parquet_file.iter_batches(columns=columns):
            batch_dict = batch.to_pydict()
            num_rows = len(batch_dict["record"])
            for i in range(num_rows):
                row = {key: values[i] for key, values in batch_dict.items()}
                record_name = row.pop("record")
                if current is None or current["record"] != record_name:
                    if current is not None:
                        yield current
                    current = {"record": record_name, "elements": []}
                current["elements"].append(row)

        if current is not None:
            yield current

    def get_record_count(self, filename: str) -> int:
        """Count runs of equal ``record`` values without building datasets."""
        table = pq.read_table(filename, columns=["record"])
        count = 0
        previous: object = object()
        for name in table.column("record").to_pylist():
            if name != previous:
                count += 1
                previous = name
        return count
