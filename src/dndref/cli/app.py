"""CLI application using Typer."""

import sys

import typer
from pydantic import ValidationError
from pydantic_settings import SettingsError

from dndref.cli.commands.check import check_upstreams
from dndref.cli.commands.config import config_app
from dndref.cli.commands.endpoints import list_endpoints
from dndref.cli.commands.fetch import fetch_reference
from dndref.cli.commands.serve import serve
from dndref.cli.console import print_error
from dndref.cli.exceptions import CliError
from dndref.models.config import Config

__all__ = ["app", "main"]

app = typer.Typer(
    name="dndref",
    help="Resilient proxy for the D&D 5e reference API.",
    add_completion=True,
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """
    dndref CLI entry point.

    Logs at DNDREF_LOG_LEVEL unless --verbose forces DEBUG.
    """
    from dndref.logging import configure_logging

    if verbose:
        configure_logging("DEBUG")
        return

    try:
        level = Config().log_level  # type: ignore[call-arg]
    except (ValidationError, SettingsError):
        # The command loads the settings again and reports the error itself.
        level = "INFO"
    configure_logging(level)


app.add_typer(config_app, name="config")

app.command(name="serve")(serve)
app.command(name="fetch")(fetch_reference)
app.command(name="check")(check_upstreams)
app.command(name="endpoints")(list_endpoints)


def main() -> None:
    """Main entry point for CLI."""
    try:
        app()
    except CliError as e:
        print_error(e.message)
        sys.exit(e.exit_code)
    except Exception as e:
        print_error(f"An unexpected error occurred: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
