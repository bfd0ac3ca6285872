"""Console utility functions for formatting and output."""

import click
from typing import Optional, Any, List, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme


# Status symbols for consistent iconography
STATUS_SYMBOLS = {
    'success': '✨',
    'sparkles': '✨',
    'running': '🚀',
    'gear': '⚙️',
    'info': '💡',
    'warning': '⚠️',
    'error': '❌',
    'check': '✅',
    'list': '📋',
    'preview': '👀',
    'file': '📄',
    'metrics': '📊'
}

MEZZANINE_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "muted": "dim white",
    "title": "bold cyan"
})

# Lazy loading for Rich console to improve startup performance
_console = None


def _get_console() -> Optional[Console]:
    """Get the shared Rich console, creating it on first use."""
    global _console
    if _console is None:
        try:
            _console = Console(theme=MEZZANINE_THEME)
        except Exception:
            return None
    return _console


def _rich_echo(message: str, color: str = "white", bold: bool = False, symbol: str = None):
    """Echo message with Rich formatting, falling back to plain click output."""
    if symbol and symbol in STATUS_SYMBOLS:
        message = f"{STATUS_SYMBOLS[symbol]} {message}"

    console = _get_console()
    if console:
        try:
            style = f"bold {color}" if bold else color
            # Resource paths may contain [brackets]; never treat them as markup
            console.print(message, style=style, markup=False, emoji=False, highlight=False)
            return
        except Exception:
            pass

    click.echo(message)


def _rich_success(message: str, symbol: str = None):
    """Display success message with green color and bold styling."""
    _rich_echo(message, color="green", symbol=symbol, bold=True)


def _rich_error(message: str, symbol: str = None):
    """Display error message with red color."""
    _rich_echo(message, color="red", symbol=symbol)


def _rich_warning(message: str, symbol: str = None):
    """Display warning message with yellow color."""
    _rich_echo(message, color="yellow", symbol=symbol)


def _rich_info(message: str, symbol: str = None):
    """Display info message with blue color."""
    _rich_echo(message, color="blue", symbol=symbol)


def _rich_blank_line():
    """Print a blank line."""
    console = _get_console()
    if console:
        console.print()
    else:
        click.echo()


def _rich_panel(content: str, title: str = None, style: str = "cyan"):
    """Display content in a Rich panel with fallback."""
    console = _get_console()
    if console:
        try:
            console.print(Panel(Text(content), title=title, border_style=style))
            return
        except Exception:
            pass

    # Fallback to simple text display
    if title:
        click.echo(f"\n--- {title} ---")
    click.echo(content)
    if title:
        click.echo("-" * (len(title) + 8))


def _create_summary_table(rows: List[Tuple[str, str, str]], title: str = "Build Summary") -> Optional[Any]:
    """Create a three-column Rich table (component, count, details)."""
    try:
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("Component", style="bold white", min_width=15)
        table.add_column("Count", style="cyan", min_width=8)
        table.add_column("Details", style="white", min_width=20)

        for component, count, details in rows:
            table.add_row(Text(component), Text(count), Text(details))

        return table
    except Exception:
        return None


def _create_declarations_table(rows: List[Tuple[str, str, str, str]]) -> Optional[Any]:
    """Create a Rich table listing marked declarations and their status."""
    try:
        table = Table(title=f"{STATUS_SYMBOLS['list']} Marked Declarations", show_header=True, header_style="bold cyan")
        table.add_column("Declaration", style="bold white")
        table.add_column("Resource", style="white")
        table.add_column("Generated As", style="green")
        table.add_column("Status", style="yellow", min_width=10)

        for declaration, resource, generated_as, status in rows:
            table.add_row(Text(declaration), Text(resource), Text(generated_as), Text(status))

        return table
    except Exception:
        return None
