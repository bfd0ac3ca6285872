"""Command-line interface for Mezzanine."""

import sys
from pathlib import Path

import click

from mezzanine.version import get_version
from mezzanine.config import ProcessorConfig, CONFIG_FILE
from mezzanine.declarations import MezzanineElementSource, SourceTreeDeclarationSource
from mezzanine.diagnostics import ConsoleMessager
from mezzanine.errors import ConfigurationError, MezzanineError
from mezzanine.generation import rejection_reason, run_build
from mezzanine.generation.constants import UMBRELLA_TYPE_NAME
from mezzanine.utils.console import (
    _rich_success, _rich_error, _rich_info, _rich_warning, _rich_blank_line,
    _rich_panel, _create_summary_table, _create_declarations_table, _get_console
)


def print_version(ctx, param, value):
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return

    console = _get_console()
    if console:
        from rich.text import Text
        from rich.panel import Panel
        version_text = Text()
        version_text.append("Mezzanine", style="bold cyan")
        version_text.append(f" version {get_version()}", style="white")
        console.print(Panel(version_text, border_style="cyan", padding=(0, 1)))
    else:
        click.echo(f"Mezzanine version {get_version()}")

    ctx.exit()


def _load_config(project_dir, **overrides) -> ProcessorConfig:
    """Load configuration or exit with an error message."""
    try:
        return ProcessorConfig.from_mezzanine_yml(project_dir, **overrides)
    except ConfigurationError as e:
        _rich_error(f"Invalid configuration: {e}", symbol="error")
        sys.exit(1)


_path_type = click.Path(path_type=Path)

project_dir_option = click.option(
    '--project-dir', '-C', type=click.Path(file_okay=False, path_type=Path), default=Path("."),
    show_default=True, help=f"Directory containing {CONFIG_FILE}; relative roots resolve against it"
)
source_root_option = click.option(
    '--source-root', '-s', type=_path_type, default=None, help="Root of the Python sources to scan"
)


@click.group(help="Mezzanine: embed text resources as generated Python constants")
@click.option('--version', is_flag=True, callback=print_version,
              expose_value=False, is_eager=True, help="Show version and exit.")
@click.pass_context
def cli(ctx):
    """Main entry point for the Mezzanine CLI."""
    ctx.ensure_object(dict)


@cli.command(help="Generate the Mezzanine module from marked declarations")
@project_dir_option
@source_root_option
@click.option('--resource-root', '-r', type=_path_type, default=None, help="Directory resource paths are relative to")
@click.option('--output-dir', '-o', type=_path_type, default=None, help="Generated sources directory")
@click.option('--encoding', default=None, help="Resource text encoding (platform default when omitted)")
@click.option('--dry-run', is_flag=True, help="Preview the generated module without writing it")
@click.option('--quiet', '-q', is_flag=True, help="Only report warnings and errors")
@click.pass_context
def build(ctx, project_dir, source_root, resource_root, output_dir, encoding, dry_run, quiet):
    """Run one build round: discover, read, generate and write."""
    config = _load_config(
        project_dir,
        source_root=source_root,
        resource_root=resource_root,
        output_dir=output_dir,
        encoding=encoding,
        dry_run=dry_run or None,
        quiet=quiet or None
    )

    if not config.source_root.is_dir():
        _rich_error(f"Source root does not exist: {config.source_root}", symbol="error")
        sys.exit(1)

    try:
        result = run_build(config)
    except MezzanineError:
        # The message was already reported by the processor
        _rich_error("Build failed; no files were written", symbol="error")
        sys.exit(1)

    stats = result.stats
    if config.dry_run:
        _rich_success("Resource generation completed successfully (dry run)", symbol="check")
        _rich_panel(result.content, title="📋 Generated Module Preview", style="cyan")
    else:
        _rich_success(f"Resources embedded into {result.output_path}", symbol="sparkles")

    if config.quiet:
        return

    _rich_blank_line()
    rows = [
        ("Declarations", str(stats.get('declarations_found', 0)), "Marked declarations discovered"),
        ("Accepted", str(stats.get('declarations_accepted', 0)), "String fields and variables"),
        ("Resources", str(stats.get('resources_embedded', 0)), f"{stats.get('characters_embedded', 0)} characters embedded"),
        ("Output", "PREVIEW" if config.dry_run else "WRITTEN", str(result.output_path or "-")),
    ]
    table = _create_summary_table(rows)
    console = _get_console()
    if table is not None and console:
        console.print(table)
    else:
        for component, count, details in rows:
            _rich_info(f"{component}: {count} ({details})")


@cli.command(name="list", help="List marked declarations and whether they will be generated")
@project_dir_option
@source_root_option
@click.pass_context
def list_declarations(ctx, project_dir, source_root):
    """Show every marked declaration with its generated name or rejection reason."""
    config = _load_config(project_dir, source_root=source_root)
    source = SourceTreeDeclarationSource(config.source_root, ConsoleMessager(), exclude=[config.output_dir])

    rows = []
    for declaration in MezzanineElementSource(source).create_element_stream():
        reason = rejection_reason(declaration)
        rows.append((
            f"{declaration.module}:{declaration.line} {declaration}",
            declaration.resource_path or "-",
            f"{UMBRELLA_TYPE_NAME}.{declaration.qualified_name}" if reason is None else "-",
            "ready" if reason is None else f"skipped: {reason}"
        ))

    if not rows:
        _rich_warning(f"No marked declarations found under {config.source_root}", symbol="warning")
        return

    table = _create_declarations_table(rows)
    console = _get_console()
    if table is not None and console:
        console.print(table)
    else:
        for declaration, resource, generated_as, status in rows:
            click.echo(f"{declaration}  {resource}  {generated_as}  {status}")


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
