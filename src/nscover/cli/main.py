"""nscover CLI - nscov command."""

import click

from nscover.cli.forget import forget_command
from nscover.cli.generate import generate_command
from nscover.cli.recent import recent_command
from nscover.cli.selection import select_command
from nscover.cli.tree import tree_command
from nscover.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="nscov")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """nscover - namespace-filtered coverage reports for .NET solutions."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(tree_command, name="tree")
cli.add_command(select_command, name="select")
cli.add_command(generate_command, name="generate")
cli.add_command(recent_command, name="recent")
cli.add_command(forget_command, name="forget")


if __name__ == "__main__":
    cli()
