"""nscov select command - include or exclude namespaces."""

from pathlib import Path

import click

from nscover.cli.utils import cli_errors, open_workspace
from nscover.core.progress import pluralize, status


@click.command()
@click.argument("solution", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("project_key", metavar="PROJECT")
@click.argument("namespaces", nargs=-1, required=True)
@click.option("--off/--on", "exclude", default=False, help="Exclude (--off) or include (--on)")
def select_command(solution: Path, project_key: str, namespaces: tuple[str, ...], exclude: bool) -> None:
    """Include or exclude NAMESPACES (and everything below them) for PROJECT.

    The selection is saved for the solution and used by the next generate.
    """
    workspace = open_workspace(solution)
    with cli_errors():
        project = workspace.project(project_key)
        unknown = [ns for ns in namespaces if not project.tree.set_checked(ns, not exclude)]
        workspace.save_selections()

    for namespace in unknown:
        status(f"Unknown namespace: {namespace}", style="warning")
    changed = len(namespaces) - len(unknown)
    verb = "Excluded" if exclude else "Included"
    status(f"{verb} {pluralize(changed, 'namespace')} in {project.name}", style="success")
    if unknown:
        raise click.exceptions.Exit(1)
