"""Mezzanine - embed text resources as generated Python constants."""

from .marker import FileStream
from .version import __version__
from .config import ProcessorConfig
from .errors import (
    MezzanineError,
    ConfigurationError,
    ResourceReadError,
    WriteError,
    DuplicateMemberError,
    InvalidIdentifierError
)
from .diagnostics import Messager, ConsoleMessager
from .generation import MezzanineProcessor, ProcessingResult, run_build

__all__ = [
    'FileStream',
    'ProcessorConfig',
    'MezzanineError',
    'ConfigurationError',
    'ResourceReadError',
    'WriteError',
    'DuplicateMemberError',
    'InvalidIdentifierError',
    'Messager',
    'ConsoleMessager',
    'MezzanineProcessor',
    'ProcessingResult',
    'run_build',
    '__version__'
]
