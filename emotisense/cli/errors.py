"""Error output shared by EmotiSense commands."""

from typing import NoReturn

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()


def fail(message: str, title: str = "Error") -> NoReturn:
    """Print a red error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)
