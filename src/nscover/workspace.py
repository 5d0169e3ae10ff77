"""Ties solution parsing, the selection store and the pipeline together."""

from __future__ import annotations

from pathlib import Path

from nscover.config.models import NscoverConfig
from nscover.core.errors import SolutionError
from nscover.core.logging import get_logger
from nscover.pipeline.models import PipelineResult
from nscover.pipeline.pipeline import CoveragePipeline
from nscover.solution.models import ProjectModel, SolutionModel
from nscover.solution.parser import parse_solution
from nscover.store.selection import SelectionStore

log = get_logger("workspace")


class CoverageWorkspace:
    """One loaded solution and its persisted namespace selections."""

    def __init__(
        self,
        store: SelectionStore,
        config: NscoverConfig | None = None,
        pipeline: CoveragePipeline | None = None,
    ) -> None:
        self._store = store
        self._config = config or NscoverConfig()
        self._pipeline = pipeline or CoveragePipeline(self._config)
        self.solution: SolutionModel | None = None

    def _require_solution(self) -> SolutionModel:
        if self.solution is None:
            raise SolutionError.not_loaded()
        return self.solution

    def load_solution(self, path: str | Path) -> SolutionModel:
        """Parse a solution and re-apply the deselections saved for it."""
        solution = parse_solution(path)
        restored = 0
        for project in solution.projects:
            deselected = self._store.load_deselected(solution.solution_path, project.full_path)
            if deselected:
                restored += project.tree.apply_deselected(deselected)
        self.solution = solution
        log.info("solution_loaded", solution=solution.solution_path, restored=restored)
        return solution

    def project(self, key: str) -> ProjectModel:
        project = self._require_solution().find_project(key)
        if project is None:
            raise SolutionError.project_not_found(key)
        return project

    def select_all_projects(self) -> None:
        for project in self._require_solution().test_projects:
            project.is_selected = True

    def unselect_all_projects(self) -> None:
        for project in self._require_solution().test_projects:
            project.is_selected = False

    def save_selections(self) -> int:
        """Persist every test project's unchecked namespaces."""
        solution = self._require_solution()
        return self._store.save_deselected(
            solution.solution_path,
            [(p.full_path, p.tree.deselected_namespaces()) for p in solution.test_projects],
        )

    async def generate(self) -> PipelineResult:
        """Run the coverage pipeline over the loaded solution's test projects.

        Selections are saved whatever the outcome; the solution only enters
        the recent history when at least one report was produced.
        """
        solution = self._require_solution()
        result = await self._pipeline.run(solution.solution_path, solution.test_projects)
        self.save_selections()
        if result.any_report:
            self._store.upsert_solution_report(solution.solution_path)
        return result
