"""Data models for marked declarations."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class DeclarationKind(Enum):
    """Kinds of program element a marker can be attached to."""
    FIELD = "field"          # Annotated name in a class body
    VARIABLE = "variable"    # Annotated name at module level
    METHOD = "method"
    TYPE = "type"
    PARAMETER = "parameter"


@dataclass(frozen=True)
class Declaration:
    """A marked program declaration as surfaced by discovery."""
    name: str
    kind: DeclarationKind
    enclosing_type: Tuple[str, ...]
    type_name: Optional[str] = None  # Unparsed declared type, None when not annotated
    resource_path: Optional[str] = None  # Marker payload, None when not a string literal
    module: str = ""
    file_path: Optional[Path] = None
    line: int = 0

    @property
    def enclosing_type_name(self) -> str:
        """Dotted name of the enclosing type."""
        return ".".join(self.enclosing_type)

    @property
    def qualified_name(self) -> str:
        """Dotted name of the declaration inside its enclosing type."""
        return ".".join(self.enclosing_type + (self.name,))

    @property
    def location(self) -> str:
        """Human readable source location."""
        if self.file_path is None:
            return self.module or "<unknown>"
        return f"{self.file_path}:{self.line}"

    def __str__(self) -> str:
        return f"{self.kind.value} {self.qualified_name}"


@dataclass(frozen=True)
class PathPair:
    """A supported declaration paired with its resource path."""
    declaration: Declaration
    path: str


@dataclass(frozen=True)
class ContentPair:
    """A supported declaration paired with the full text of its resource."""
    declaration: Declaration
    text: str = field(repr=False)
