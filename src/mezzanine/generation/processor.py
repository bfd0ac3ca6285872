"""Main processing orchestration for embedded resource generation.

The pipeline is lazy until the generated type specs are collected: each
declaration is filtered, mapped to its resource path, read, and turned into a
type spec before the next one is pulled from discovery.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional, TypeVar, Union

from .filters import accepts
from .generator import generate_compilation_unit, generate_mezzanine_type_spec, generate_type_spec
from .mappers import file_to_string_contents, to_path_pair
from .writer import DirectoryFileWriter, FileWriter
from ..config import ProcessorConfig
from ..declarations.discovery import DeclarationSource, MezzanineElementSource, SourceTreeDeclarationSource
from ..diagnostics import ConsoleMessager, Messager
from ..errors import MezzanineError


T = TypeVar("T")


@dataclass
class ProcessingResult:
    """Result of one build round."""
    success: bool
    skipped: bool = False
    output_path: Optional[Path] = None
    content: str = ""
    stats: Dict[str, Any] = field(default_factory=dict)


class MezzanineProcessor:
    """Runs the embedding pipeline at most once per build invocation."""

    def __init__(self, source: DeclarationSource, writer: FileWriter, messager: Messager,
                 resource_root: Union[str, Path] = ".", encoding: Optional[str] = None,
                 dry_run: bool = False):
        """Initialize the processor.

        Args:
            source (DeclarationSource): Supplies the round's marked declarations.
            writer (FileWriter): Persists the umbrella unit.
            messager (Messager): Diagnostics sink for every stage.
            resource_root (Union[str, Path]): Directory resource paths are relative to.
            encoding (Optional[str]): Resource encoding, platform default when None.
            dry_run (bool): Generate without writing.
        """
        self.source = source
        self.writer = writer
        self.messager = messager
        self.resource_root = Path(resource_root)
        self.encoding = encoding
        self.dry_run = dry_run
        self.is_processed = False

    def process(self) -> ProcessingResult:
        """Run the pipeline; later calls are no-ops that report success.

        Returns:
            ProcessingResult: Generated content, output path and statistics.

        Raises:
            MezzanineError: If a resource cannot be read, a declaration
                generates an invalid or duplicate name, or the unit cannot be
                written. Nothing is written.
        """
        if self.is_processed:
            return ProcessingResult(success=True, skipped=True)

        self.is_processed = True

        self.messager.report_info("Starting Mezzanine processing")

        try:
            return self._run()
        except MezzanineError as e:
            self.messager.report_error(str(e))
            raise

    def _run(self) -> ProcessingResult:
        stats = {"declarations_found": 0, "declarations_accepted": 0}
        element_stream = MezzanineElementSource(self.source).create_element_stream()

        declarations = _counted(element_stream, stats, "declarations_found")
        supported = _counted(filter(accepts, declarations), stats, "declarations_accepted")
        path_pairs = map(to_path_pair, supported)
        content_pairs = map(file_to_string_contents(self.resource_root, self.messager, self.encoding), path_pairs)
        type_specs = list(map(generate_type_spec, content_pairs))

        mezzanine = generate_mezzanine_type_spec(type_specs)
        unit = generate_compilation_unit(mezzanine)
        content = unit.render()

        stats["resources_embedded"] = mezzanine.constant_count()
        stats["characters_embedded"] = sum(_constant_lengths(mezzanine))

        output_path = None
        if not self.dry_run:
            output_path = self.writer.write(unit)
            self.messager.report_info("File successfully processed")

        return ProcessingResult(
            success=True,
            output_path=output_path,
            content=content,
            stats=stats
        )


def run_build(config: ProcessorConfig, messager: Optional[Messager] = None) -> ProcessingResult:
    """Run one build round for a configuration.

    Args:
        config (ProcessorConfig): Resolved build configuration.
        messager (Optional[Messager]): Diagnostics sink, console output when None.

    Returns:
        ProcessingResult: Result of the round.
    """
    messager = messager or ConsoleMessager(verbose=not config.quiet)
    source = SourceTreeDeclarationSource(config.source_root, messager, exclude=[config.output_dir])
    processor = MezzanineProcessor(
        source=source,
        writer=DirectoryFileWriter(config.output_dir),
        messager=messager,
        resource_root=config.resource_root,
        encoding=config.encoding,
        dry_run=config.dry_run
    )
    return processor.process()


def _counted(items: Iterable[T], stats: Dict[str, Any], key: str) -> Iterator[T]:
    for item in items:
        stats[key] += 1
        yield item


def _constant_lengths(type_spec) -> Iterator[int]:
    for constant in type_spec.constants:
        yield len(constant.value)
    for nested in type_spec.types:
        yield from _constant_lengths(nested)
