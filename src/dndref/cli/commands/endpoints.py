from rich.table import Table

from dndref.cli.console import console
from dndref.constants import DND_ENDPOINTS
from dndref.mock_data import MOCK_PAYLOADS


def list_endpoints() -> None:
    """List the known D&D 5e reference endpoints."""
    table = Table(title="Reference Endpoints")
    table.add_column("Name", style="cyan")
    table.add_column("Endpoint", style="green")
    table.add_column("Mock Data", justify="center")

    for name, endpoint in DND_ENDPOINTS.items():
        table.add_row(name, endpoint, "yes" if endpoint in MOCK_PAYLOADS else "")

    console.print(table)
