import ast
import importlib.util
import textwrap
from pathlib import Path
from typing import Callable, List

import pytest

from mezzanine.declarations import Declaration, DeclarationKind, parse_module
from mezzanine.diagnostics import Messager
from mezzanine.generation import CompilationUnit, FileWriter


class RecordingMessager(Messager):
    """Messager that keeps every reported message."""

    def __init__(self):
        self.infos: List[str] = []
        self.warnings: List[str] = []
        self.errors: List[str] = []

    def report_info(self, message: str) -> None:
        self.infos.append(message)

    def report_warning(self, message: str) -> None:
        self.warnings.append(message)

    def report_error(self, message: str) -> None:
        self.errors.append(message)


class RecordingWriter(FileWriter):
    """FileWriter that keeps units in memory."""

    def __init__(self):
        self.units: List[CompilationUnit] = []

    def write(self, unit: CompilationUnit) -> Path:
        self.units.append(unit)
        return Path("memory") / unit.relative_path


@pytest.fixture
def messager() -> RecordingMessager:
    return RecordingMessager()


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def make_declaration() -> Callable[..., Declaration]:
    def _make_declaration(
        name: str = "LICENSE",
        *,
        kind: DeclarationKind = DeclarationKind.FIELD,
        enclosing_type: tuple = ("Licenses",),
        type_name: str = "str",
        resource_path: str = "license.txt",
    ) -> Declaration:
        return Declaration(
            name=name,
            kind=kind,
            enclosing_type=enclosing_type,
            type_name=type_name,
            resource_path=resource_path,
            module="app.resources",
        )

    return _make_declaration


@pytest.fixture
def parse_source() -> Callable[..., List[Declaration]]:
    def _parse_source(source: str, module: str = "app.resources") -> List[Declaration]:
        return parse_module(ast.parse(textwrap.dedent(source)), module)

    return _parse_source


@pytest.fixture
def project(tmp_path: Path) -> dict:
    """Empty project layout with source, resource and output directories."""
    paths = {
        "root": tmp_path,
        "src": tmp_path / "src",
        "resources": tmp_path / "resources",
        "output": tmp_path / "generated",
    }
    paths["src"].mkdir()
    paths["resources"].mkdir()
    return paths


def write_source(directory: Path, relative: str, source: str) -> Path:
    path = directory / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source), encoding="utf-8")
    return path


def load_generated(path: Path):
    """Import a generated module from its file path."""
    spec = importlib.util.spec_from_file_location(f"generated_{abs(hash(str(path)))}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(name="write_source")
def write_source_fixture() -> Callable[[Path, str, str], Path]:
    return write_source


@pytest.fixture(name="load_generated")
def load_generated_fixture() -> Callable[[Path], object]:
    return load_generated
