from __future__ import annotations

import enum
from dataclasses import dataclass


class UseKind(enum.Enum):
    CLASS = "class"
    FUNCTION = "function"
    CONSTANT = "const"

    @property
    def keyword(self) -> str | None:
        """The keyword written after `use`, or None for class imports."""
        if self is UseKind.CLASS:
            return None
        return self.value


@dataclass(frozen=True)
class UseStatement:
    """A single imported name from a `use` statement."""

    kind: UseKind
    fully_qualified_name: str  # Never starts with a backslash
    alias: str | None  # The name after 'as', if any
    pointer: int  # Index of the 'use' keyword token

    @property
    def unqualified_name(self) -> str:
        return self.fully_qualified_name.rpartition("\\")[2]

    @property
    def name_as_referenced(self) -> str:
        return self.alias if self.alias is not None else self.unqualified_name

    @property
    def canonical(self) -> str:
        """The string the ordering is computed on."""
        if self.alias is not None:
            return f"{self.fully_qualified_name} as {self.alias}"
        return self.fully_qualified_name


@dataclass
class Diagnostic:
    """A reported finding."""

    code: str
    message: str
    pointer: int
    line: int
    column: int
