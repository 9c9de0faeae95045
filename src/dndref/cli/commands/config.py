import typer

from dndref.cli.console import console
from dndref.cli.context import load_config

config_app = typer.Typer(no_args_is_help=True, help="Inspect dndref configuration.")


@config_app.command()
def show() -> None:
    """Display the effective configuration."""
    console.print(load_config())
