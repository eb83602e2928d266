"""Rich-based progress reporting.

The assembler never touches a global console; it receives a
``ConsoleReporter`` instead.  Pass ``Console(quiet=True)`` for a silent run or
``Console(record=True)`` to capture the output in tests.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table


class ConsoleReporter:
    """Human-readable progress sink backed by a Rich ``Console``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    # -- Structure -----------------------------------------------------------

    def banner(self, title: str, subtitle: str = "") -> None:
        body = f"[bold bright_cyan]{escape(title)}[/bold bright_cyan]"
        if subtitle:
            body += f"\n{escape(subtitle)}"
        self.console.print(Panel(body, border_style="bright_cyan"))

    def rule(self, title: str = "", style: str = "dim") -> None:
        self.console.print(Rule(escape(title), style=style))

    def step(self, index: int, total: int, message: str) -> None:
        """Print a ``Step i/n`` header."""
        self.console.print()
        self.console.print(
            f"[bold magenta]Step {index}/{total}: {escape(message)}[/bold magenta]"
        )

    # -- Messages ------------------------------------------------------------

    def info(self, message: str) -> None:
        self.console.print(f"[blue]{escape(message)}[/blue]")

    def success(self, message: str) -> None:
        self.console.print(f"[bold green]{escape(message)}[/bold green]")

    def warn(self, message: str) -> None:
        self.console.print(f"[bold yellow]{escape(message)}[/bold yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]{escape(message)}[/bold red]")

    # -- Child process output ------------------------------------------------

    def output(self, line: str) -> None:
        """Forward one line of a child's stdout."""
        self.console.print(f"[dim]{escape(line)}[/dim]")

    def error_output(self, line: str) -> None:
        """Forward one line of a child's stderr."""
        self.console.print(f"[yellow]{escape(line)}[/yellow]")

    # -- Tables / lists ------------------------------------------------------

    def bullet_list(self, title: str, items: Iterable[str]) -> None:
        items = list(items)
        if not items:
            return
        self.console.print(f"[yellow]{escape(title)}[/yellow]")
        for item in items:
            self.console.print(f"  [cyan]- {escape(item)}[/cyan]")

    def summary_table(self, data: dict[str, str], title: str = "Summary") -> None:
        """Print a two-column key/value summary table."""
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("Item", style="dim", no_wrap=True)
        table.add_column("Value")

        for key, value in data.items():
            table.add_row(key, str(value))

        self.console.print(table)
        self.console.print()
