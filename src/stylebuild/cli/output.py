"""Rich console output utilities for the stylebuild CLI.

Supports colored success/error/warning messages and respects the
NO_COLOR environment variable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from stylebuild.models import WrittenFile


def create_console(no_color: bool = False) -> Console:
    """Create the console used for CLI messages.

    Without no_color, Rich decides from the terminal and the NO_COLOR
    environment variable.
    """
    if no_color:
        return Console(no_color=True, force_terminal=False, highlight=False)
    return Console()


console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("Built 2 stylesheets")
        ✓ Built 2 stylesheets
    """
    console.print(f"[green]✓[/green] {escape(message)}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X.

    Example:
        >>> error("Failed to compile src/scss/main.scss")
        ✗ Failed to compile src/scss/main.scss
    """
    console.print(f"[red]✗[/red] {escape(message)}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(message, **kwargs)


def print_written_files(written: list[WrittenFile]) -> None:
    """Print a table of the files produced by a build.

    Args:
        written: Files returned by StyleBuildTask.run().
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("Source")
    table.add_column("Output")
    table.add_column("Size", justify="right")
    for item in written:
        table.add_row(str(item.source), str(item.output), f"{item.size} B")
    console.print(table)


def use_plain_output() -> None:
    """Replace the module console with one that prints no colors."""
    global console
    console = create_console(no_color=True)
