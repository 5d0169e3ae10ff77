"""Solution (.slnx/.sln) and project (.csproj/.vbproj/.fsproj) parsing.

Only what the namespace selection needs is read: the project list, test
project detection, project references and the namespaces declared in source
files. Unreadable source files and malformed project files never abort a scan.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from nscover.core.errors import SolutionError
from nscover.core.logging import get_logger
from nscover.solution.models import ProjectModel, SolutionModel

log = get_logger("solution.parser")

SOLUTION_EXTENSIONS = (".slnx", ".sln")

_SLN_PROJECT_RE = re.compile(
    r'^\s*Project\(.*\)\s=\s"[^"]+",\s*"([^"]+\.(?:csproj|vbproj|fsproj))",\s*"\{[^"]+}"',
    re.IGNORECASE,
)
_TEST_PACKAGES = ("xunit", "nunit", "mstest")
_TEST_NAME_SUFFIXES = (".tests", ".test", ".testing")
_SKIPPED_DIRS = frozenset({"bin", "obj"})
_NAMESPACE_KEYWORD = "namespace "


def is_solution_file(path: str | Path, extensions: tuple[str, ...] = SOLUTION_EXTENSIONS) -> bool:
    if not str(path):
        return False
    return Path(path).suffix.lower() in extensions


def _normalize(raw: str, base_dir: Path) -> Path:
    relative = raw.replace("\\", "/")
    return (base_dir / relative).resolve()


def _strip_namespaces(root: ET.Element) -> ET.Element:
    for elem in root.iter():
        if isinstance(elem.tag, str) and "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]
    return root


def project_paths_from_slnx(path: Path) -> list[Path]:
    try:
        root = _strip_namespaces(ET.parse(path).getroot())
    except ET.ParseError as e:
        raise SolutionError.parse_error(str(path), str(e)) from e
    base_dir = path.parent.resolve()
    return [
        _normalize(element.get("Path", ""), base_dir)
        for element in root.iter("Project")
        if element.get("Path")
    ]


def project_paths_from_sln(path: Path) -> list[Path]:
    base_dir = path.parent.resolve()
    result: list[Path] = []
    with path.open(encoding="utf-8-sig", errors="replace") as f:
        for line in f:
            match = _SLN_PROJECT_RE.match(line)
            if match:
                result.append(_normalize(match.group(1), base_dir))
    return result


def extract_namespaces(project_dir: Path) -> set[str]:
    """Namespaces declared in ``*.cs`` files beneath a project directory.

    The first ``namespace`` line of each file counts; block and file-scoped
    declarations are both accepted. Files that cannot be read are skipped.
    """
    namespaces: set[str] = set()
    if not project_dir.is_dir():
        return namespaces

    for source in sorted(project_dir.rglob("*.cs")):
        if _SKIPPED_DIRS.intersection(source.relative_to(project_dir).parts[:-1]):
            continue
        try:
            text = source.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            log.debug("source_unreadable", path=str(source), error=str(e))
            continue

        for line in text.splitlines():
            stripped = line.lstrip()
            if stripped[: len(_NAMESPACE_KEYWORD)].lower() == _NAMESPACE_KEYWORD:
                namespace = stripped[len(_NAMESPACE_KEYWORD) :].rstrip("; {\t")
                if namespace:
                    namespaces.add(namespace)
                break

    return namespaces


def _looks_like_test_project(name: str) -> bool:
    lowered = name.lower()
    return lowered.endswith(_TEST_NAME_SUFFIXES) or "Test" in name


def parse_project(path: Path) -> ProjectModel:
    """Read one project file.

    A project whose file cannot be parsed is still returned, with whatever
    was gathered before the failure.
    """
    project = ProjectModel(name=path.stem, full_path=str(path))
    project.is_test_project = _looks_like_test_project(project.name)

    try:
        root = _strip_namespaces(ET.parse(path).getroot())
    except (ET.ParseError, OSError) as e:
        log.warning("project_parse_failed", path=str(path), error=str(e))
        return project

    for package in root.iter("PackageReference"):
        include = (package.get("Include") or "").lower()
        if any(marker in include for marker in _TEST_PACKAGES):
            project.is_test_project = True
            break

    for reference in root.iter("ProjectReference"):
        include = reference.get("Include")
        if include:
            project.project_references.append(str(_normalize(include, path.parent.resolve())))

    project.namespaces = extract_namespaces(path.parent)
    return project


def parse_solution(path: str | Path) -> SolutionModel:
    """Parse a solution, link project dependencies and build namespace trees.

    Raises:
        SolutionError: If the file is missing, not a solution, or malformed.
    """
    solution_path = Path(path)
    if not solution_path.is_file():
        raise SolutionError.not_found(str(solution_path))
    suffix = solution_path.suffix.lower()
    if suffix == ".slnx":
        project_paths = project_paths_from_slnx(solution_path)
    elif suffix == ".sln":
        project_paths = project_paths_from_sln(solution_path)
    else:
        raise SolutionError.unsupported(str(solution_path))

    solution = SolutionModel(solution_path=str(solution_path.resolve()))
    for project_path in project_paths:
        if project_path.is_file():
            solution.projects.append(parse_project(project_path))
        else:
            log.warning("project_missing", path=str(project_path))

    for project in solution.projects:
        project.link_dependencies(solution.projects)

    for project in solution.projects:
        project.build_namespace_tree()

    log.info(
        "solution_parsed",
        path=solution.solution_path,
        projects=len(solution.projects),
        test_projects=len(solution.test_projects),
    )
    return solution
