"""Solution and project discovery."""

from nscover.solution.models import ProjectModel, SolutionModel
from nscover.solution.parser import (
    extract_namespaces,
    is_solution_file,
    parse_project,
    parse_solution,
)

__all__ = [
    "ProjectModel",
    "SolutionModel",
    "extract_namespaces",
    "is_solution_file",
    "parse_project",
    "parse_solution",
]
