"""Solution and project models handed to the namespace model and pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from nscover.namespaces.model import ProjectNamespaceModel


@dataclass(eq=False)
class ProjectModel:
    """One project of a solution.

    Identity-hashed: dependency walks keep projects in sets.
    """

    name: str
    full_path: str
    is_test_project: bool = False
    is_selected: bool = True
    project_references: list[str] = field(default_factory=list)
    dependencies: list[ProjectModel] = field(default_factory=list)
    namespaces: set[str] = field(default_factory=set)
    coverage_report_index_path: str | None = None
    tree: ProjectNamespaceModel = field(default_factory=ProjectNamespaceModel)

    @property
    def has_coverage_report(self) -> bool:
        return bool(self.coverage_report_index_path and self.coverage_report_index_path.strip())

    @property
    def directory(self) -> Path:
        return Path(self.full_path).parent

    def link_dependencies(self, projects: list[ProjectModel]) -> None:
        """Resolve ``project_references`` against the solution's projects."""
        by_path = {_path_key(p.full_path): p for p in projects}
        for reference in self.project_references:
            target = by_path.get(_path_key(reference))
            if target is not None and target is not self and target not in self.dependencies:
                self.dependencies.append(target)

    def all_dependencies(self) -> list[ProjectModel]:
        """Transitive dependencies, each once, in discovery order."""
        visited: list[ProjectModel] = []
        seen: set[int] = {id(self)}
        stack = list(reversed(self.dependencies))
        while stack:
            current = stack.pop()
            if id(current) in seen:
                continue
            seen.add(id(current))
            visited.append(current)
            stack.extend(reversed(current.dependencies))
        return visited

    def effective_namespaces(self) -> set[str]:
        """Namespaces shown in this project's tree.

        Test projects cover the code they reference: the union of every
        transitive non-test dependency's namespaces. Other projects show
        their own.
        """
        if not self.is_test_project:
            return {ns for ns in self.namespaces if ns.strip()}
        result: set[str] = set()
        for dependency in self.all_dependencies():
            if not dependency.is_test_project:
                result.update(ns for ns in dependency.namespaces if ns.strip())
        return result

    def build_namespace_tree(self) -> ProjectNamespaceModel:
        self.tree.name = self.name
        self.tree.set_namespaces(self.effective_namespaces())
        return self.tree


@dataclass
class SolutionModel:
    solution_path: str
    projects: list[ProjectModel] = field(default_factory=list)

    @property
    def test_projects(self) -> list[ProjectModel]:
        return [p for p in self.projects if p.is_test_project]

    def find_project(self, key: str) -> ProjectModel | None:
        """Look a project up by name or path (case-insensitive)."""
        wanted = key.casefold()
        for project in self.projects:
            if project.name.casefold() == wanted or _path_key(project.full_path) == _path_key(key):
                return project
        return None


def _path_key(path: str) -> str:
    return str(Path(path)).replace("\\", "/").casefold()
