"""Fixtures for pipeline tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from nscover.namespaces.model import ProjectNamespaceModel
from nscover.solution.models import ProjectModel


@pytest.fixture
def solution_file(tmp_path: Path) -> Path:
    path = tmp_path / "App.slnx"
    path.write_text("<Solution />")
    return path


@pytest.fixture
def provisioner() -> AsyncMock:
    mock = AsyncMock()
    mock.ensure_available.return_value = True
    mock.package_id = "dotnet-reportgenerator-globaltool"
    return mock


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., ProjectModel]:
    """Test project factory; each project gets its own directory under tmp_path."""

    def factory(name: str, namespaces: Sequence[str] = ("App.Core",), **kwargs: object) -> ProjectModel:
        project_dir = tmp_path / name
        project_dir.mkdir(parents=True, exist_ok=True)
        project = ProjectModel(
            name=name,
            full_path=str(project_dir / f"{name}.csproj"),
            is_test_project=True,
            **kwargs,  # type: ignore[arg-type]
        )
        project.tree = ProjectNamespaceModel(name, namespaces)
        return project

    return factory
