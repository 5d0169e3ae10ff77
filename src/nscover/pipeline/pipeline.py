"""Coverage generation pipeline.

Idle -> ToolProvisioning -> Building -> ProjectCoverage (per project) ->
Aggregating -> Done.

Tool provisioning, solution validation/build and the empty-selection check
abort the run with a distinct message. Per-project failures (test run,
artifact discovery, report generation) are collected and the remaining
projects still run. Projects are processed sequentially: they share the
solution's build output and the report tool's global state.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from nscover.config.constants import REPORT_INDEX_NAME
from nscover.config.models import NscoverConfig
from nscover.core.errors import ErrorCode, PipelineError
from nscover.core.logging import clear_run_id, get_logger, set_run_id
from nscover.pipeline.artifacts import find_coverage_artifact
from nscover.pipeline.commands import (
    build_args,
    coverage_test_args,
    format_filter,
    report_args,
    report_paths,
)
from nscover.pipeline.models import (
    BUILD_FAILED,
    INVALID_SOLUTION,
    NO_PROJECTS_SELECTED,
    TOOL_UNAVAILABLE,
    PipelineResult,
    PipelineState,
    ProjectOutcome,
    aggregate,
)
from nscover.pipeline.process import ProcessRunner
from nscover.pipeline.summary import CoverageParseError, summarize_cobertura
from nscover.pipeline.tools import ReportToolProvisioner
from nscover.solution.models import ProjectModel

log = get_logger("pipeline")


class CoveragePipeline:
    """Builds a solution and produces an HTML coverage report per test project.

    A fresh run always starts at ``IDLE``; nothing is resumed.
    """

    def __init__(
        self,
        config: NscoverConfig | None = None,
        *,
        runner: ProcessRunner | None = None,
        provisioner: ReportToolProvisioner | None = None,
    ) -> None:
        self._config = config or NscoverConfig()
        self._runner = runner or ProcessRunner()
        self._provisioner = provisioner or ReportToolProvisioner(self._runner, self._config.tools)
        self.state = PipelineState.IDLE

    def _enter(self, state: PipelineState) -> None:
        log.debug("pipeline_state", state=state.value, previous=self.state.value)
        self.state = state

    async def create_report(self, solution_path: str | None, projects: Sequence[ProjectModel]) -> str:
        """Run the pipeline and return only the outcome message."""
        return (await self.run(solution_path, projects)).message

    async def run(
        self, solution_path: str | None, projects: Sequence[ProjectModel]
    ) -> PipelineResult:
        run_id = set_run_id()
        self.state = PipelineState.IDLE
        log.info("pipeline_start", solution=solution_path, projects=len(projects))
        try:
            await self._provision_tools()
            await self._build(solution_path)
            selected = self._select_projects(projects)

            outcomes: list[ProjectOutcome] = []
            self._enter(PipelineState.PROJECT_COVERAGE)
            for index, project in enumerate(selected, start=1):
                log.info("project_coverage_start", project=project.name, index=index, total=len(selected))
                outcomes.append(await self._cover_project(project))

            self._enter(PipelineState.AGGREGATING)
            status, message = aggregate(outcomes)
            result = PipelineResult(
                status=status, message=message, projects=outcomes, run_id=run_id
            )
            log.info(
                "pipeline_done",
                status=status,
                succeeded=result.succeeded_count,
                failed=result.failed_count,
            )
        except PipelineError as e:
            status = "no_projects" if e.code == ErrorCode.PIPELINE_NO_PROJECTS else "aborted"
            log.warning("pipeline_aborted", state=self.state.value, error=e.error_name)
            result = PipelineResult(status=status, message=e.message, state=self.state, run_id=run_id)
        finally:
            clear_run_id()

        self._enter(PipelineState.DONE)
        return result

    async def _provision_tools(self) -> None:
        self._enter(PipelineState.TOOL_PROVISIONING)
        if not await self._provisioner.ensure_available():
            raise PipelineError.tool_unavailable(TOOL_UNAVAILABLE, self._provisioner.package_id)

    def _validate_solution(self, solution_path: str | None) -> Path:
        if not solution_path:
            raise PipelineError.invalid_solution(INVALID_SOLUTION, solution_path)
        path = Path(solution_path)
        if not path.is_file() or path.suffix.lower() not in self._config.pipeline.solution_extensions:
            raise PipelineError.invalid_solution(INVALID_SOLUTION, solution_path)
        return path

    async def _build(self, solution_path: str | None) -> None:
        self._enter(PipelineState.BUILDING)
        path = self._validate_solution(solution_path)
        try:
            result = await self._runner.run(
                self._config.tools.dotnet_executable, build_args(str(path)), cwd=path.parent
            )
        except OSError as e:
            raise PipelineError.build_failed(f"Failed to start build process: {e}", None) from e

        if not result.succeeded:
            if result.stderr.strip():
                message = result.stderr
            elif result.stdout.strip():
                message = f"{BUILD_FAILED}:\n{result.stdout}"
            else:
                message = BUILD_FAILED
            raise PipelineError.build_failed(message, result.exit_code)
        log.info("solution_built", solution=str(path), duration_s=round(result.duration_seconds, 1))

    def _select_projects(self, projects: Sequence[ProjectModel]) -> list[ProjectModel]:
        selected = [p for p in projects if p.is_test_project and p.is_selected]
        if not selected:
            raise PipelineError.no_projects(NO_PROJECTS_SELECTED)
        return selected

    async def _cover_project(self, project: ProjectModel) -> ProjectOutcome:
        include = format_filter(project.tree.selected_namespaces())
        exclude = format_filter(project.tree.unselected_namespaces())
        plog = log.bind(project=project.name)
        plog.debug("coverage_filters", include=include, exclude=exclude)

        def failure(kind: str, message: str, **kwargs: object) -> ProjectOutcome:
            plog.warning("project_coverage_failed", kind=kind)
            return ProjectOutcome.failure(
                project.name,
                project.full_path,
                kind,  # type: ignore[arg-type]
                message,
                include_filter=include,
                exclude_filter=exclude,
                **kwargs,
            )

        try:
            result = await self._runner.run(
                self._config.tools.dotnet_executable,
                coverage_test_args(project.full_path, include=include, exclude=exclude),
                cwd=project.directory,
            )
        except OSError as e:
            return failure("test_failed", f"Failed to start test process for {project.name}: {e}")
        if not result.succeeded:
            return failure("test_failed", result.error_text)

        artifact = find_coverage_artifact(
            result.combined,
            project_dir=project.directory,
            artifact_name=self._config.pipeline.artifact_name,
            results_hint=self._config.pipeline.results_hint,
        )
        if artifact is None:
            return failure("artifact_not_found", f"Coverage file not found for {project.name}")

        target_dir, history_dir = report_paths(artifact, self._config)
        try:
            report = await self._runner.run(
                self._config.tools.report_executable,
                report_args(artifact, target_dir, history_dir, self._config.pipeline.report_types),
                cwd=artifact.parent,
            )
        except OSError as e:
            return failure(
                "report_failed",
                f"Failed to start report generator for {project.name}: {e}",
                artifact_path=str(artifact),
            )
        if not report.succeeded:
            return failure("report_failed", report.error_text, artifact_path=str(artifact))

        index_path = target_dir / REPORT_INDEX_NAME
        project.coverage_report_index_path = str(index_path)

        line_rate: float | None = None
        try:
            line_rate = summarize_cobertura(artifact).line_rate
        except CoverageParseError as e:
            plog.debug("coverage_summary_unavailable", error=str(e))

        plog.info("project_coverage_done", report=str(index_path), line_rate=line_rate)
        return ProjectOutcome(
            project_name=project.name,
            project_path=project.full_path,
            succeeded=True,
            include_filter=include,
            exclude_filter=exclude,
            artifact_path=str(artifact),
            report_index_path=str(index_path),
            line_rate=line_rate,
        )
