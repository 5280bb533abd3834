"""A table of literal values, each stored once at a word offset."""

from __future__ import annotations

from typing import Iterator, Optional


class LiteralTable:
    """Literals in insertion order, keyed by their source text.

    Each distinct text is stored once. Its offset is the number of
    entries added before it.
    """

    def __init__(self) -> None:
        self._offsets: dict[str, int] = {}
        self._values: list[int] = []

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, text: object) -> bool:
        return text in self._offsets

    def __iter__(self) -> Iterator[int]:
        """Yield the values of the entries in offset order."""
        return iter(list(self._values))

    def is_empty(self) -> bool:
        """Return True if no literal has been added."""
        return not self._values

    def search_offset(self, text: str) -> Optional[int]:
        """Return the offset of the entry for text, or None if absent."""
        return self._offsets.get(text)

    def find_or_add(self, text: str, value: int) -> int:
        """Return the offset of text, adding an entry with value if absent."""
        offset = self._offsets.get(text)
        if offset is not None:
            return offset
        offset = len(self._values)
        self._offsets[text] = offset
        self._values.append(value)
        return offset