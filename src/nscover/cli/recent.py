"""nscov recent command - list solutions with generated reports."""

import click
from rich.markup import escape
from rich.table import Table

from nscover.cli.utils import cli_errors, load_cli_config, open_store
from nscover.core.progress import get_console


@click.command()
@click.option("--limit", "-n", type=int, default=None, help="Maximum number of solutions")
def recent_command(limit: int | None) -> None:
    """List solutions with a generated report, most recent first."""
    with cli_errors():
        config = load_cli_config()
        store = open_store(config)
        solutions = store.get_recent_solutions(limit or config.history.recent_limit)

    console = get_console()
    if not solutions:
        console.print("[dim]No reports generated yet[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Solution")
    for index, solution in enumerate(solutions, start=1):
        table.add_row(str(index), escape(solution))
    console.print(table)
