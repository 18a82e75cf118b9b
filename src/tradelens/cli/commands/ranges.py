"""Time-range listing command."""

import click
from rich.console import Console

from tradelens.services.reporting import create_time_ranges_table

console = Console()


@click.command("ranges")
def ranges_command():
    """List the supported --range tokens."""
    console.print(create_time_ranges_table())
