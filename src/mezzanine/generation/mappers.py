"""Mapping stages from declarations to resource text."""

import locale
from pathlib import Path
from typing import Callable, Optional, Union

from ..declarations.models import ContentPair, Declaration, PathPair
from ..diagnostics import Messager
from ..errors import ResourceReadError


def to_path_pair(declaration: Declaration) -> PathPair:
    """Pair a supported declaration with its resource path."""
    return PathPair(declaration=declaration, path=declaration.resource_path)


def resolve_resource_path(path: str, resource_root: Union[str, Path]) -> Path:
    """Resolve a marker path against the resource root.

    Absolute paths are returned unchanged.
    """
    resource_path = Path(path)
    if resource_path.is_absolute():
        return resource_path
    return Path(resource_root) / resource_path


def read_resource(file_path: Path, encoding: Optional[str] = None) -> str:
    """Read the whole text of a resource file.

    Line terminators are preserved exactly as stored.

    Args:
        file_path (Path): File to read.
        encoding (Optional[str]): Text encoding, platform default when None.

    Returns:
        str: File contents.

    Raises:
        ResourceReadError: If the file cannot be opened, read or decoded.
    """
    encoding = encoding or locale.getpreferredencoding(False)
    try:
        with open(file_path, 'r', encoding=encoding, newline='') as f:
            return f.read()
    except (OSError, UnicodeDecodeError, LookupError) as e:
        raise ResourceReadError(file_path, str(e)) from e


def file_to_string_contents(resource_root: Union[str, Path], messager: Messager,
                            encoding: Optional[str] = None) -> Callable[[PathPair], ContentPair]:
    """Create the stage that replaces each resource path with the file's text.

    Args:
        resource_root (Union[str, Path]): Directory resource paths are relative to.
        messager (Messager): Receives a "Processing file" message before each read.
        encoding (Optional[str]): Text encoding, platform default when None.

    Returns:
        Callable[[PathPair], ContentPair]: The mapping function.
    """
    def to_content_pair(pair: PathPair) -> ContentPair:
        messager.report_info(f"Processing file: {pair.path}")
        file_path = resolve_resource_path(pair.path, resource_root)
        return ContentPair(declaration=pair.declaration, text=read_resource(file_path, encoding))

    return to_content_pair
