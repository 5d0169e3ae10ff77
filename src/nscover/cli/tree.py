"""nscov tree command - show the namespace selection of test projects."""

from pathlib import Path

import click
from rich.markup import escape
from rich.tree import Tree

from nscover.cli.utils import cli_errors, open_workspace
from nscover.core.progress import get_console
from nscover.namespaces.node import NamespaceNode
from nscover.solution.models import ProjectModel


def _label(node: NamespaceNode) -> str:
    if node.checked:
        mark = "[green]\\[x][/green]" if node.is_fully_checked() else "[yellow]\\[~][/yellow]"
    else:
        mark = "[dim]\\[ ][/dim]"
    return f"{mark} {escape(node.segment)}"


def _add_nodes(branch: Tree, nodes: list[NamespaceNode], show_collapsed: bool) -> None:
    for node in nodes:
        child = branch.add(_label(node), highlight=False)
        if node.expanded or show_collapsed:
            _add_nodes(child, node.children, show_collapsed)


def render_project(project: ProjectModel, *, show_collapsed: bool = True) -> Tree:
    marker = "" if project.is_selected else " [dim](not selected)[/dim]"
    root = Tree(f"[bold]{escape(project.name)}[/bold]{marker}", highlight=False)
    if not project.tree.visible_roots:
        root.add("[dim]no namespaces[/dim]")
    _add_nodes(root, project.tree.visible_roots, show_collapsed)
    return root


@click.command()
@click.argument("solution", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--project", "-p", "project_key", default=None, help="Only show this test project")
@click.option("--filter", "-f", "filter_text", default="", help="Show namespaces matching TEXT")
@click.option("--collapsed", is_flag=True, help="Respect collapsed nodes instead of showing all")
def tree_command(
    solution: Path, project_key: str | None, filter_text: str, collapsed: bool
) -> None:
    """Show the namespace tree of each test project.

    [x] included, [~] partially included, [ ] excluded.
    """
    workspace = open_workspace(solution)
    with cli_errors():
        if project_key:
            projects = [workspace.project(project_key)]
        else:
            projects = workspace.solution.test_projects if workspace.solution else []

    console = get_console()
    if not projects:
        console.print("[yellow]No test projects found[/yellow]")
        return
    for project in projects:
        project.tree.set_filter(filter_text)
        console.print(render_project(project, show_collapsed=not collapsed))
