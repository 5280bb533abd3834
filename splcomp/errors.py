"""Error types and small diagnostic helpers shared by the compiler."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO


@dataclass(frozen=True)
class FileLocation:
    """A position in a source file: its name and a line number."""

    filename: str
    line: int

    def __str__(self) -> str:
        return f"{self.filename}: line {self.line}"


class CompilerError(Exception):
    """Raised when the compiler cannot continue."""


class ProgramError(CompilerError):
    """An error in the program being compiled, tied to a source location."""

    def __init__(self, file_location: FileLocation, message: str) -> None:
        self.file_location = file_location
        self.message = message
        super().__init__(f"{file_location} {message}")


def debug_print(message: str) -> None:
    """Flush standard output, then write message to standard error."""
    sys.stdout.flush()
    sys.stderr.flush()
    sys.stderr.write(message)
    sys.stderr.flush()


def newline(out: TextIO) -> None:
    """Write a newline to out and flush it."""
    out.write("\n")
    out.flush()