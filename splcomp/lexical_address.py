"""Lexical addresses: how many scopes out, and where in the frame."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LexicalAddress:
    """A name's location: levels outward and byte offset in the frame."""

    levels_outward: int
    offset_in_ar: int

    def __str__(self) -> str:
        return f"({self.levels_outward},{self.offset_in_ar})"