"""A single scope: the names declared in one block and their attributes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from .errors import CompilerError, FileLocation

MAX_SCOPE_SIZE = 4096


class IdKind(enum.Enum):
    """What sort of entity a name was declared as."""

    CONSTANT = "constant"
    VARIABLE = "variable"
    PROCEDURE = "procedure"

    def __str__(self) -> str:
        return self.value


@dataclass
class IdAttrs:
    """Attributes of a declared name.

    offset_count is the position among the constants and variables of the
    scope; it is filled in when the name is inserted into a scope.
    """

    file_location: FileLocation
    kind: IdKind
    offset_count: int = 0


class Scope:
    """The declarations of one scope, in declaration order."""

    def __init__(self) -> None:
        self._entries: dict[str, IdAttrs] = {}
        self._size = 0
        self._loc_count = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def loc_count(self) -> int:
        """Return the number of constants and variables declared here."""
        return self._loc_count

    def full(self) -> bool:
        """Return True if no more names can be declared in this scope."""
        return self._size >= MAX_SCOPE_SIZE

    def insert(self, name: str, attrs: IdAttrs) -> None:
        """Declare name with attrs.

        Unless attrs is for a procedure, its offset_count is set to the
        current location count, which then goes up by one.
        """
        if self.full():
            raise CompilerError(f"Scope is full, cannot declare \"{name}\"")
        if attrs.kind is not IdKind.PROCEDURE:
            attrs.offset_count = self._loc_count
            self._loc_count += 1
        # The first declaration of a name is the one lookups find.
        self._entries.setdefault(name, attrs)
        self._size += 1

    def lookup(self, name: str) -> Optional[IdAttrs]:
        """Return the attributes of name, or None if it is not declared here."""
        return self._entries.get(name)