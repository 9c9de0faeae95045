from typing import Annotated

import typer
import uvicorn

from dndref.cli.console import console
from dndref.cli.context import load_config
from dndref.server import create_app

# loguru-only level without a uvicorn equivalent
_UVICORN_LEVELS = {"SUCCESS": "info"}


def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Bind port")] = None,
) -> None:
    """Run the reference proxy HTTP server."""
    config = load_config()
    bind_host = config.host if host is None else host
    bind_port = config.port if port is None else port

    console.print(f"Serving reference proxy on [cyan]http://{bind_host}:{bind_port}[/cyan]")
    uvicorn.run(
        create_app(config),
        host=bind_host,
        port=bind_port,
        log_level=_UVICORN_LEVELS.get(config.log_level, config.log_level.lower()),
    )
