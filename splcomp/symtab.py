"""The symbol table: a stack of scopes searched from the innermost outward."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import CompilerError, ProgramError
from .scope import IdAttrs, Scope

MAX_NESTING = 100


@dataclass(frozen=True)
class IdUse:
    """A use of a name: its attributes and how many scopes out it was declared."""

    attrs: IdAttrs
    levels_outward: int


class SymbolTable:
    """A stack of nested scopes."""

    def __init__(self) -> None:
        self._scopes: list[Scope] = []

    def __len__(self) -> int:
        return len(self._scopes)

    def empty(self) -> bool:
        """Return True if there are no scopes."""
        return not self._scopes

    def _current(self) -> Scope:
        if not self._scopes:
            raise CompilerError("No scope on symtab's stack!")
        return self._scopes[-1]

    def scope_loc_count(self) -> int:
        """Return the current scope's count of constants and variables."""
        return self._current().loc_count()

    def scope_size(self) -> int:
        """Return the number of names declared in the current scope."""
        return len(self._current())

    def scope_full(self) -> bool:
        """Return True if the current scope is full."""
        return self._current().full()

    def current_nesting_level(self) -> int:
        """Return the index of the innermost scope (-1 when empty)."""
        return len(self._scopes) - 1

    def full(self) -> bool:
        """Return True if no further scope can be entered."""
        return self.current_nesting_level() == MAX_NESTING - 1

    def defined(self, name: str) -> bool:
        """Return True if name is declared in any scope."""
        return self.lookup(name) is not None

    def defined_in_current_scope(self, name: str) -> bool:
        """Return True if name is declared in the innermost scope."""
        return self._current().lookup(name) is not None

    def insert(self, name: str, attrs: IdAttrs) -> None:
        """Declare name in the current scope.

        Raises ProgramError if it is already declared in that scope.
        """
        scope = self._current()
        old = scope.lookup(name)
        if old is not None:
            raise ProgramError(
                attrs.file_location,
                f'{attrs.kind} "{name}" is already declared as a {old.kind}',
            )
        scope.insert(name, attrs)

    def enter_scope(self) -> None:
        """Push a fresh scope."""
        if len(self._scopes) >= MAX_NESTING:
            raise CompilerError("Cannot enter scope, symtab's stack is full!")
        self._scopes.append(Scope())

    def leave_scope(self) -> None:
        """Pop the innermost scope."""
        if not self._scopes:
            raise CompilerError("Cannot leave scope, no scope on symtab's stack!")
        self._scopes.pop()

    def lookup(self, name: str) -> Optional[IdUse]:
        """Find name from the innermost scope outward, or return None."""
        for levels_out, scope in enumerate(reversed(self._scopes)):
            attrs = scope.lookup(name)
            if attrs is not None:
                return IdUse(attrs, levels_out)
        return None