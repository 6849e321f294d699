"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output.
All CLI output should go through this module.
"""

from datetime import datetime
from typing import Any

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table


def format_value(value: Any) -> str:
    """Render a record field for display."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S UTC")
    return str(value)


class Console:
    """CLI output manager wrapping rich."""

    def __init__(
        self,
        *,
        force_terminal: bool | None = None,
        quiet: bool = False,
    ) -> None:
        """Initialize the console.

        Args:
            force_terminal: Force terminal mode (True/False) or auto-detect (None).
            quiet: Suppress non-essential output.
        """
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{message}[/dim]")

    # -------------------------------------------------------------------------
    # Structured output
    # -------------------------------------------------------------------------

    def fields(self, values: dict[str, Any], *, title: str | None = None) -> None:
        """Print a record's fields as a key/value panel."""
        lines = [f"[cyan]{key}:[/cyan] {format_value(value)}" for key, value in values.items()]
        content = "\n".join(lines) if lines else "[dim]No fields[/dim]"
        self._console.print(Panel(content, title=title, border_style="blue"))

    def table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str],
        *,
        title: str | None = None,
    ) -> None:
        """Print rows as a table with one column per key."""
        table = Table(title=title, show_header=True, header_style="bold")
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*(format_value(row.get(column)) for column in columns))
        self._console.print(table)


_console: Console | None = None


def get_console() -> Console:
    """Return the process-wide console."""
    global _console
    if _console is None:
        _console = Console()
    return _console
