"""Persisting generated compilation units."""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from .code_model import CompilationUnit
from ..errors import WriteError


class FileWriter(ABC):
    """Persists a compilation unit for the host build."""

    @abstractmethod
    def write(self, unit: CompilationUnit) -> Path:
        """Write the unit and return the path of the written module.

        Raises:
            WriteError: If the unit cannot be persisted.
        """
        pass


class DirectoryFileWriter(FileWriter):
    """Writes units below a generated-sources directory as importable packages."""

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)

    def write(self, unit: CompilationUnit) -> Path:
        target = self.output_dir / unit.relative_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            _atomic_write(target, unit.render())
            self._ensure_package(target.parent)
        except OSError as e:
            raise WriteError(target, str(e)) from e
        return target

    def _ensure_package(self, package_dir: Path) -> None:
        """Add an ``__init__.py`` to each package directory once the module is written."""
        current = package_dir
        while current != self.output_dir and self.output_dir in current.parents:
            init_file = current / "__init__.py"
            if not init_file.exists():
                init_file.touch()
            current = current.parent


def _atomic_write(path: Path, data: str) -> None:
    """Atomically write text data to path."""
    fd, tmp_name = tempfile.mkstemp(prefix="mezzanine-write-", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(data)
        os.replace(tmp_name, path)
    except Exception:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
