"""
Normalization of raw datasets into TagRecords.

Handles the layout differences between formats:
- JSON / JSONL hold datasets in the DICOM JSON model, keyed by "GGGGEEEE"
  with {"vr": ..., "Value" | "InlineBinary" | "BulkDataURI": ...} entries
- Parquet holds a long tag table already grouped into
  {"record": name, "elements": [row, ...]} by the loader

Values are rendered to display strings and byte lengths are derived the way
the binary encoding would size them.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

from tagview.records import UNDEFINED_LENGTH, TagElement, TagKey, TagRecord
from tagview.tag_dictionary import keyword_for


# Fixed element sizes of binary numeric value representations
NUMERIC_VR_SIZES: dict[str, int] = {
    "AT": 4,
    "FD": 8,
    "FL": 4,
    "SL": 4,
    "SS": 2,
    "SV": 8,
    "UL": 4,
    "US": 2,
    "UV": 8,
}

MULTI_VALUE_SEPARATOR = "\\"


def _render_person_name(value: Any) -> str:
    if isinstance(value, dict):
        groups = [value.get(k, "") for k in ("Alphabetic", "Ideographic", "Phonetic")]
        while groups and not groups[-1]:
            groups.pop()
        return "=".join(groups)
    return "" if value is None else str(value)


def _render_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _even(length: int) -> int:
    return length + (length % 2)


def normalize_json_element(tag: str, entry: dict[str, Any]) -> TagElement:
    """Decode one DICOM JSON model attribute.

    Args:
        tag: Attribute key, "GGGGEEEE" in hex.
        entry: The attribute object with a "vr" and at most one value field.

    Returns:
        The decoded element.

    Raises:
        ValueError: If the tag or the entry is malformed.

    Examples:
        >>> normalize_json_element("00100010", {"vr": "PN", "Value": [{"Alphabetic": "Doe^J"}]})
        TagElement(key=TagKey(group=16, element=16), vr='PN', value='Doe^J', length=6, name='PatientName')
    """
    key = TagKey.parse(tag)
    if not isinstance(entry, dict):
        raise ValueError(f"Attribute {tag} must be an object (got {type(entry).__name__})")

    vr = str(entry.get("vr", "UN")).upper()
    name = keyword_for(key)

    if vr == "SQ":
        items = entry.get("Value") or []
        plural = "item" if len(items) == 1 else "items"
        return TagElement(key, vr, f"<{len(items)} {plural}>", UNDEFINED_LENGTH, name)

    if "BulkDataURI" in entry:
        return TagElement(key, vr, "<bulk data>", UNDEFINED_LENGTH, name)

    if "InlineBinary" in entry:
        try:
            size = len(base64.b64decode(entry["InlineBinary"], validate=True))
        except (binascii.Error, TypeError) as e:
            raise ValueError(f"Attribute {tag} has invalid InlineBinary data") from e
        return TagElement(key, vr, f"<binary {size} bytes>", _even(size), name)

    values = entry.get("Value") or []
    if not isinstance(values, list):
        raise ValueError(f"Attribute {tag} Value must be an array")

    if vr == "PN":
        rendered = MULTI_VALUE_SEPARATOR.join(_render_person_name(v) for v in values)
    else:
        rendered = MULTI_VALUE_SEPARATOR.join(_render_scalar(v) for v in values)

    if vr in NUMERIC_VR_SIZES:
        length = NUMERIC_VR_SIZES[vr] * len(values)
    else:
        length = _even(len(rendered.encode("utf-8")))

    return TagElement(key, vr, rendered, length, name)


def _parse_tag_part(value: Any, column: str) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 16)
        except ValueError as e:
            raise ValueError(f"Column '{column}' holds non-hex value {value!r}") from e
    raise ValueError(f"Column '{column}' must be an integer or hex string (got {value!r})")


def normalize_table_row(row: dict[str, Any]) -> TagElement:
    """Decode one row of a Parquet tag table."""
    key = TagKey(_parse_tag_part(row["group"], "group"), _parse_tag_part(row["element"], "element"))
    length = row.get("length")
    return TagElement(
        key=key,
        vr=str(row.get("vr") or "UN").upper(),
        value=_render_scalar(row.get("value")),
        length=UNDEFINED_LENGTH if length is None else int(length),
        name=row.get("name") or keyword_for(key),
    )


def normalize_record(
    dataset: dict[str, Any],
    source_format: str,
    default_name: str,
) -> TagRecord:
    """Normalize a raw dataset to a TagRecord.

    Elements keep the order of the source document.

    Args:
        dataset: Raw dataset as yielded by a DataLoader.
        source_format: 'json', 'jsonl' or 'parquet'.
        default_name: Record name used when the dataset carries none.

    Returns:
        The decoded record.

    Raises:
        ValueError: If the dataset is malformed.
    """
    if source_format == "parquet":
        name = dataset.get("record")
        elements = [normalize_table_row(row) for row in dataset.get("elements", [])]
        return TagRecord(str(name) if name is not None else default_name, elements)

    elements = [normalize_json_element(tag, entry) for tag, entry in dataset.items()]
    return TagRecord(default_name, elements)
