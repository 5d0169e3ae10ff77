"""nscov forget command - drop saved selections and history for a solution."""

from pathlib import Path

import click
import questionary

from nscover.cli.utils import cli_errors, load_cli_config, open_store, solution_key
from nscover.core.progress import status


@click.command()
@click.argument("solution", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
def forget_command(solution: Path, yes: bool) -> None:
    """Remove saved namespace selections and report history for SOLUTION.

    SOLUTION does not need to exist anymore.
    """
    key = solution_key(solution)
    if not yes:
        answer = questionary.confirm(
            f"Forget saved selections for {key}?",
            default=False,
        ).ask()
        if not answer:
            click.echo("Cancelled")
            return

    with cli_errors():
        store = open_store(load_cli_config())
        store.remove_solution_records(key)
    status(f"Forgot {key}", style="success")
