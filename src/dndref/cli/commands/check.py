from typing import Annotated

import typer

from dndref.cli.console import print_success, print_warning
from dndref.cli.context import get_app_context
from dndref.cli.utils import attempts_table


def check_upstreams(
    path: Annotated[
        str, typer.Option("--path", "-p", help="Endpoint to probe on every upstream")
    ] = "",
) -> None:
    """
    Probe every configured upstream and report which ones are healthy.

    Exits with status 1 when none of them answers.
    """
    with get_app_context() as ctx:
        upstreams = ctx.config.upstreams
        ctx.console.print(f"Checking [bold]{len(upstreams)}[/bold] upstreams...")

        results = ctx.tester.check_all(upstreams, path)
        ctx.console.print(attempts_table(results, title="Upstream Health"))

        healthy = sum(1 for attempt in results if attempt.ok)
        if not healthy:
            print_warning("No upstream is reachable. The proxy will serve mock data.")
            raise typer.Exit(1)

        print_success(f"{healthy}/{len(upstreams)} upstreams healthy.")
