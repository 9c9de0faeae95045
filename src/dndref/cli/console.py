from rich.console import Console

__all__ = ["console", "err_console", "print_error", "print_note", "print_success", "print_warning"]

# stdout carries command results only (payloads, tables); everything else goes to stderr.
console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {message}")


def print_warning(message: str) -> None:
    err_console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_note(message: str) -> None:
    """Print a dim side note that must not pollute piped stdout."""
    err_console.print(f"[dim]{message}[/dim]")


def print_success(message: str) -> None:
    console.print(f"[bold green]{message}[/bold green]")
