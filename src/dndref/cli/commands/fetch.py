from typing import Annotated

import typer

from dndref.cli.console import print_note, print_warning
from dndref.cli.context import get_app_context
from dndref.cli.exceptions import FetchError
from dndref.cli.utils import attempts_table
from dndref.exceptions import MissingEndpointError, UpstreamUnavailableError


def fetch_reference(
    endpoint: Annotated[str, typer.Argument(help="Endpoint name, e.g. 'classes' or 'spells/aid'")],
    no_fallback: Annotated[
        bool, typer.Option("--no-fallback", help="Fail instead of serving mock data")
    ] = False,
    show_attempts: Annotated[
        bool, typer.Option("--attempts", "-a", help="Show every upstream attempt on stderr")
    ] = False,
) -> None:
    """
    Fetch a reference endpoint through the upstream fallback chain.

    Only the JSON payload is written to stdout, so the output can be piped.
    """
    with get_app_context() as ctx:
        try:
            result = ctx.fetcher.fetch(endpoint, fallback=not no_fallback)
        except MissingEndpointError as e:
            raise FetchError(e.message) from e
        except UpstreamUnavailableError as e:
            if show_attempts:
                ctx.err_console.print(attempts_table(e.attempts))
            raise FetchError(str(e)) from e

        if show_attempts:
            ctx.err_console.print(attempts_table(result.attempts))
        if result.mock:
            print_warning("All upstreams failed, showing mock data.")
        else:
            print_note(f"Served by {result.source}")

        ctx.console.print_json(data=result.payload)
