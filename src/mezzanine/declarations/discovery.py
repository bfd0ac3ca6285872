"""Discovery of marked declarations for one build round."""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .models import Declaration
from .parser import parse_declarations
from ..diagnostics import Messager


# Directories never scanned for source files
SKIP_DIRECTORIES = {
    '.git',
    'node_modules',
    '__pycache__',
    '.pytest_cache',
    '.venv',
    'venv',
    '.tox',
    'build',
    'dist',
    '.mypy_cache'
}


class DeclarationSource(ABC):
    """Supplies the marked declarations visible to a build round."""

    @abstractmethod
    def declarations(self) -> Iterator[Declaration]:
        """Yield marked declarations in discovery order."""
        pass


class StaticDeclarationSource(DeclarationSource):
    """Declaration source backed by an existing collection of descriptors."""

    def __init__(self, declarations: Iterable[Declaration]):
        self._declarations = list(declarations)

    def declarations(self) -> Iterator[Declaration]:
        return iter(self._declarations)


class SourceTreeDeclarationSource(DeclarationSource):
    """Scans a tree of Python sources for marked declarations."""

    def __init__(self, source_root: Union[str, Path], messager: Optional[Messager] = None,
                 exclude: Iterable[Union[str, Path]] = ()):
        """Initialize the source.

        Args:
            source_root (Union[str, Path]): Root of the package tree to scan.
            messager (Optional[Messager]): Sink for warnings about unparsable files.
            exclude (Iterable[Union[str, Path]]): Extra directories to skip, such as the output directory.
        """
        self.source_root = Path(source_root)
        self.messager = messager
        self.exclude = {Path(p).resolve() for p in exclude}

    def declarations(self) -> Iterator[Declaration]:
        for file_path in find_source_files(self.source_root, self.exclude):
            module = module_name_for(file_path, self.source_root)
            try:
                found = parse_declarations(file_path, module)
            except (SyntaxError, ValueError, OSError) as e:
                if self.messager is not None:
                    self.messager.report_warning(f"Skipping {file_path}: {e}")
                continue
            yield from found


class MezzanineElementSource:
    """Produces the one-shot stream of declarations for a build round."""

    def __init__(self, source: DeclarationSource):
        self.source = source
        self._consumed = False

    def create_element_stream(self) -> Iterator[Declaration]:
        """Return a lazy iterator over the round's declarations.

        Raises:
            RuntimeError: If the stream was already created for this round.
        """
        if self._consumed:
            raise RuntimeError("Element stream already consumed for this round")
        self._consumed = True
        return iter(self.source.declarations())


def find_source_files(source_root: Path, exclude: Iterable[Path] = ()) -> List[Path]:
    """Find Python source files under a root directory.

    Args:
        source_root (Path): Directory to scan.
        exclude (Iterable[Path]): Resolved directories to prune.

    Returns:
        List[Path]: Source files in sorted, deterministic order.
    """
    if not source_root.is_dir():
        return []

    excluded = set(exclude)
    source_files = []
    for dir_path, dir_names, file_names in os.walk(source_root):
        dir_names[:] = sorted(
            name for name in dir_names
            if not _should_skip_directory(name) and Path(dir_path, name).resolve() not in excluded
        )
        for file_name in sorted(file_names):
            if file_name.endswith(".py"):
                source_files.append(Path(dir_path) / file_name)
    return source_files


def module_name_for(file_path: Path, source_root: Path) -> str:
    """Compute the dotted module name of a file relative to the source root.

    Args:
        file_path (Path): Python source file.
        source_root (Path): Root the module path is relative to.

    Returns:
        str: Dotted module name; a root ``__init__.py`` takes the root directory's name.
    """
    parts = list(file_path.relative_to(source_root).with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    if not parts:
        return source_root.resolve().name
    return ".".join(parts)


def _should_skip_directory(dir_name: str) -> bool:
    """Check if a directory should be skipped during scanning."""
    return dir_name in SKIP_DIRECTORIES or dir_name.endswith(".egg-info")
