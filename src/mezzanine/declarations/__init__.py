"""Declarations package - discovery and parsing of marked declarations."""

from .models import Declaration, DeclarationKind, PathPair, ContentPair
from .discovery import (
    DeclarationSource,
    StaticDeclarationSource,
    SourceTreeDeclarationSource,
    MezzanineElementSource,
    find_source_files,
    module_name_for
)
from .parser import parse_declarations, parse_module, MARKER_NAME

__all__ = [
    'Declaration',
    'DeclarationKind',
    'PathPair',
    'ContentPair',
    'DeclarationSource',
    'StaticDeclarationSource',
    'SourceTreeDeclarationSource',
    'MezzanineElementSource',
    'find_source_files',
    'module_name_for',
    'parse_declarations',
    'parse_module',
    'MARKER_NAME'
]
