#!/usr/bin/env python3
"""
Optimist CLI

Main entrypoint for the optimist command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from cli.commands import simulate
from optimist.logging_config import setup_logging

app = typer.Typer(
    name="optimist",
    help="Optimistic transition engine CLI",
    add_completion=False,
)

console = Console()

app.command(name="simulate")(simulate.simulate_command)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from optimist import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Optimist CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    setup_logging()
    app()


if __name__ == "__main__":
    main()
