"""
Decoded tag records.

A record is one source document (typically one file) holding an ordered
sequence of tag elements. Elements are already decoded: the value is a
display string and the length is the encoded byte length of the value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


# Length marker for values without a defined size (sequences, bulk data)
UNDEFINED_LENGTH = 0xFFFFFFFF


@dataclass(frozen=True, order=True)
class TagKey:
    """A (group, element) tag identity."""

    group: int
    element: int

    def __str__(self) -> str:
        return f"{self.group:04x},{self.element:04x}"

    @classmethod
    def parse(cls, text: str) -> "TagKey":
        """Parse ``"GGGGEEEE"``, ``"GGGG,EEEE"`` or ``"(GGGG,EEEE)"`` hex forms.

        Raises:
            ValueError: If the text is not a valid tag.
        """
        cleaned = text.strip().strip("()").replace(",", "").replace(" ", "")
        if len(cleaned) != 8:
            raise ValueError(f"Invalid tag '{text}': expected 8 hex digits")
        try:
            return cls(int(cleaned[:4], 16), int(cleaned[4:], 16))
        except ValueError as e:
            raise ValueError(f"Invalid tag '{text}': not hexadecimal") from e


@dataclass(frozen=True)
class TagElement:
    """One decoded tag of a record.

    Attributes:
        key: Tag identity.
        vr: Value representation code (e.g. "PN", "DA", "SQ").
        value: Rendered value.
        length: Encoded byte length, or UNDEFINED_LENGTH.
        name: Dictionary keyword, empty when unknown.
    """

    key: TagKey
    vr: str
    value: str
    length: int
    name: str = ""

    @property
    def group(self) -> int:
        return self.key.group

    @property
    def element(self) -> int:
        return self.key.element

    @property
    def has_undefined_length(self) -> bool:
        return self.length == UNDEFINED_LENGTH


@dataclass
class TagRecord:
    """A named, ordered collection of tag elements."""

    name: str
    elements: list[TagElement] = field(default_factory=list)

    def __iter__(self) -> Iterator[TagElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def keys(self) -> list[TagKey]:
        return [e.key for e in self.elements]
