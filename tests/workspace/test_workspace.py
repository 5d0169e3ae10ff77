"""Tests for CoverageWorkspace: load, persist, generate."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from nscover.core.errors import ErrorCode, SolutionError
from nscover.pipeline.models import PipelineResult, ProjectOutcome
from nscover.store.db import Database
from nscover.store.selection import SelectionStore
from nscover.workspace import CoverageWorkspace
from tests.solution.layout import make_solution


@pytest.fixture
def store() -> Iterator[SelectionStore]:
    db = Database(None)
    store = SelectionStore(db)
    store.initialize()
    yield store
    db.dispose()


@pytest.fixture
def solution_path(tmp_path: Path) -> Path:
    return make_solution(tmp_path / "repo") / "App.slnx"


def _pipeline(result: PipelineResult) -> AsyncMock:
    pipeline = AsyncMock()
    pipeline.run.return_value = result
    return pipeline


def _succeeded() -> PipelineResult:
    outcome = ProjectOutcome(project_name="App.Verify", project_path="/x", succeeded=True)
    return PipelineResult(status="success", message="Success", projects=[outcome])


class TestLoadSolution:
    def test_restores_saved_deselections(self, store: SelectionStore, solution_path: Path) -> None:
        """Selections made in one session reappear in the next."""
        # Given
        first = CoverageWorkspace(store)
        first.load_solution(solution_path)
        first.project("App.Verify").tree.set_checked("App.Core.Api", False)
        first.save_selections()

        # When
        second = CoverageWorkspace(store)
        second.load_solution(solution_path)

        # Then
        tree = second.project("App.Verify").tree
        assert tree.unselected_namespaces() == ["App.Core.Api"]
        assert tree.selected_namespaces() == ["App.Core.Models"]

    def test_unknown_project_raises(self, store: SelectionStore, solution_path: Path) -> None:
        workspace = CoverageWorkspace(store)
        workspace.load_solution(solution_path)

        with pytest.raises(SolutionError) as exc_info:
            workspace.project("Nope")
        assert exc_info.value.code == ErrorCode.SOLUTION_PROJECT_NOT_FOUND

    def test_operations_require_loaded_solution(self, store: SelectionStore) -> None:
        with pytest.raises(SolutionError) as exc_info:
            CoverageWorkspace(store).select_all_projects()
        assert exc_info.value.code == ErrorCode.SOLUTION_NOT_LOADED


class TestProjectSelection:
    def test_unselect_then_select_all(self, store: SelectionStore, solution_path: Path) -> None:
        workspace = CoverageWorkspace(store)
        solution = workspace.load_solution(solution_path)

        workspace.unselect_all_projects()
        assert not any(p.is_selected for p in solution.test_projects)

        workspace.select_all_projects()
        assert all(p.is_selected for p in solution.test_projects)


class TestGenerate:
    @pytest.mark.asyncio
    async def test_success_saves_selections_and_history(
        self, store: SelectionStore, solution_path: Path
    ) -> None:
        # Given
        pipeline = _pipeline(_succeeded())
        workspace = CoverageWorkspace(store, pipeline=pipeline)
        solution = workspace.load_solution(solution_path)
        workspace.project("App.Verify").tree.set_checked("App.Core.Models", False)

        # When
        result = await workspace.generate()

        # Then
        assert result.message == "Success"
        pipeline.run.assert_awaited_once_with(solution.solution_path, solution.test_projects)
        assert store.get_recent_solutions() == [solution.solution_path]
        project = workspace.project("App.Verify")
        assert store.load_deselected(solution.solution_path, project.full_path) == {
            "App.Core.Models"
        }

    @pytest.mark.asyncio
    async def test_failure_saves_selections_but_not_history(
        self, store: SelectionStore, solution_path: Path
    ) -> None:
        """A run without any report still remembers the selection."""
        # Given
        failed = PipelineResult(status="aborted", message="Build failed")
        workspace = CoverageWorkspace(store, pipeline=_pipeline(failed))
        solution = workspace.load_solution(solution_path)
        project = workspace.project("App.Verify")
        project.tree.set_checked("App.Core.Api", False)

        # When
        await workspace.generate()

        # Then
        assert store.get_recent_solutions() == []
        assert store.load_deselected(solution.solution_path, project.full_path) == {"App.Core.Api"}
