"""nscov generate command - build, test and write coverage reports."""

import asyncio
from pathlib import Path

import click
from rich.markup import escape

from nscover.cli.utils import cli_errors, open_workspace
from nscover.core.progress import get_console, pluralize, spinner, status
from nscover.pipeline.models import PipelineResult


def _print_result(result: PipelineResult) -> None:
    console = get_console()
    for outcome in result.projects:
        if outcome.succeeded:
            rate = f" ({outcome.line_rate:.1%} lines)" if outcome.line_rate is not None else ""
            status(f"{outcome.project_name}{rate}", style="success")
            console.print(f"    [dim]{escape(outcome.report_index_path or '')}[/dim]", highlight=False)
        else:
            status(f"{outcome.project_name}: {outcome.failure_kind}", style="error")

    style = {"success": "success", "partial": "warning"}.get(result.status, "error")
    status(result.message, style=style)


@click.command()
@click.argument("solution", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--project",
    "-p",
    "project_keys",
    multiple=True,
    help="Only run these test projects (repeatable). Default: all test projects.",
)
def generate_command(solution: Path, project_keys: tuple[str, ...]) -> None:
    """Build SOLUTION and generate a coverage report per selected test project."""
    workspace = open_workspace(solution)
    with cli_errors():
        if project_keys:
            workspace.unselect_all_projects()
            for key in project_keys:
                workspace.project(key).is_selected = True
        else:
            workspace.select_all_projects()

        selected = [p for p in workspace.solution.test_projects if p.is_selected] if workspace.solution else []
        with spinner(f"Generating coverage for {pluralize(len(selected), 'test project')}"):
            result = asyncio.run(workspace.generate())

    _print_result(result)
    if result.status not in ("success", "partial"):
        raise click.exceptions.Exit(1)
