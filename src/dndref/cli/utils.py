from collections.abc import Sequence

from pydantic import ValidationError
from rich.table import Table

from dndref.cli.console import err_console
from dndref.models.fetch import UpstreamAttempt

__all__ = ["attempts_table", "handle_validation_error"]


def handle_validation_error(e: ValidationError) -> None:
    """Render each invalid setting as a row, keyed by its environment variable."""
    table = Table(title="Configuration Error", title_style="bold red")
    table.add_column("Variable", style="bold")
    table.add_column("Problem")
    table.add_column("Value", style="red")

    for error in e.errors():
        loc = ".".join(str(part) for part in error["loc"])
        variable = f"DNDREF_{loc.upper()}" if loc else "(settings)"
        table.add_row(variable, error["msg"], repr(error.get("input")))

    err_console.print(table)


def attempts_table(attempts: Sequence[UpstreamAttempt], title: str = "Upstream Attempts") -> Table:
    """Render upstream attempt outcomes as a Rich table."""
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Upstream", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Result")

    for number, attempt in enumerate(attempts, start=1):
        status = str(attempt.status_code) if attempt.status_code is not None else "-"
        outcome = "[green]OK[/green]" if attempt.ok else f"[red]{attempt.error or 'FAILED'}[/red]"
        table.add_row(str(number), attempt.url, status, outcome)

    return table
