"""Exceptions raised while generating embedded resources."""

from pathlib import Path
from typing import Optional


class MezzanineError(Exception):
    """Base class for failures that abort a build round."""


class ConfigurationError(MezzanineError):
    """Raised when mezzanine.yml or command-line settings are invalid."""


class ResourceReadError(MezzanineError):
    """Raised when a marked resource cannot be opened or decoded."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Unable to read resource {path}: {reason}")
        self.path = path
        self.reason = reason


class WriteError(MezzanineError):
    """Raised when the generated unit cannot be written to disk."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to write generated file {path}: {reason}")
        self.path = path
        self.reason = reason


class DuplicateMemberError(MezzanineError):
    """Raised when two declarations map to the same generated constant."""

    def __init__(self, qualified_name: str, origin: Optional[str] = None):
        message = f"Duplicate generated member: {qualified_name}"
        if origin:
            message += f" (declared again at {origin})"
        super().__init__(message)
        self.qualified_name = qualified_name


class InvalidIdentifierError(MezzanineError):
    """Raised when a declaration would generate a name that is not a Python identifier."""

    def __init__(self, name: str, origin: Optional[str] = None):
        message = f"Cannot generate member named {name!r}: not a valid Python identifier"
        if origin:
            message += f" (declared at {origin})"
        super().__init__(message)
        self.name = name
        self.origin = origin
