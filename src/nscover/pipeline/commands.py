"""Command lines for the external build/test/report toolchain."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from nscover.config.constants import COLLECTOR_SETTING_PREFIX, COVERAGE_COLLECTOR
from nscover.config.models import NscoverConfig


def format_filter(namespaces: Iterable[str]) -> str:
    """Coverage filter expression: ``[*]A.*,[*]B.*``. Empty input gives ``""``."""
    joined = "".join(f"[*]{namespace}.*," for namespace in namespaces)
    return joined.rstrip(",")


def build_args(solution_path: str) -> list[str]:
    return ["build", solution_path]


def coverage_test_args(project_path: str, *, include: str = "", exclude: str = "") -> list[str]:
    """``dotnet test`` arguments for an already-built project with coverage collection.

    Collector settings follow ``--`` as run-settings overrides.
    """
    args = [
        "test",
        project_path,
        "--no-build",
        "--collect",
        COVERAGE_COLLECTOR,
        "--",
        f"{COLLECTOR_SETTING_PREFIX}.Format=cobertura",
    ]
    if include:
        args.append(f"{COLLECTOR_SETTING_PREFIX}.Include={include}")
    if exclude:
        args.append(f"{COLLECTOR_SETTING_PREFIX}.Exclude={exclude}")
    return args


def tool_list_args() -> list[str]:
    return ["tool", "list", "--global"]


def tool_install_args(package_id: str) -> list[str]:
    return ["tool", "install", "--global", package_id]


def report_paths(artifact: Path, config: NscoverConfig) -> tuple[Path, Path]:
    """Report and history directories placed beside the coverage artifact."""
    base = artifact.parent
    return base / config.pipeline.report_dir_name, base / config.pipeline.history_dir_name


def report_args(artifact: Path, target_dir: Path, history_dir: Path, report_types: str) -> list[str]:
    return [
        f"-reports:{artifact}",
        f"-targetdir:{target_dir}",
        f"-historydir:{history_dir}",
        f"-reporttypes:{report_types}",
    ]
