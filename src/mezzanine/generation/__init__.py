"""Mezzanine generation module for embedding text resources as constants."""

from .processor import MezzanineProcessor, ProcessingResult, run_build
from .filters import accepts, rejection_reason
from .mappers import to_path_pair, file_to_string_contents, read_resource, resolve_resource_path
from .generator import (
    generate_type_spec,
    generate_mezzanine_type_spec,
    generate_compilation_unit,
    is_valid_identifier
)
from .code_model import CompilationUnit, ConstantSpec, TypeSpec, escape_string
from .writer import FileWriter, DirectoryFileWriter

__all__ = [
    # Main processing interface
    'MezzanineProcessor',
    'ProcessingResult',
    'run_build',

    # Pipeline stages
    'accepts',
    'rejection_reason',
    'to_path_pair',
    'file_to_string_contents',
    'read_resource',
    'resolve_resource_path',
    'generate_type_spec',
    'generate_mezzanine_type_spec',
    'generate_compilation_unit',
    'is_valid_identifier',

    # Code model
    'CompilationUnit',
    'ConstantSpec',
    'TypeSpec',
    'escape_string',

    # Output
    'FileWriter',
    'DirectoryFileWriter'
]
