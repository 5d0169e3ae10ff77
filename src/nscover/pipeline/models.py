"""Pipeline states, per-project outcomes and the aggregate result."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

SUCCESS = "Success"
INVALID_SOLUTION = "Invalid Solution Path"
NO_PROJECTS_SELECTED = "No test projects selected"
TOOL_UNAVAILABLE = "Report generator tool is not available"
BUILD_FAILED = "Build failed"


class PipelineState(Enum):
    IDLE = "idle"
    TOOL_PROVISIONING = "tool_provisioning"
    BUILDING = "building"
    PROJECT_COVERAGE = "project_coverage"
    AGGREGATING = "aggregating"
    DONE = "done"


FailureKind = Literal["test_failed", "artifact_not_found", "report_failed"]


@dataclass
class ProjectOutcome:
    """Result of the coverage steps for one test project."""

    project_name: str
    project_path: str
    succeeded: bool = False
    failure_kind: FailureKind | None = None
    message: str = ""
    include_filter: str = ""
    exclude_filter: str = ""
    artifact_path: str | None = None
    report_index_path: str | None = None
    line_rate: float | None = None

    @classmethod
    def failure(
        cls, project_name: str, project_path: str, kind: FailureKind, message: str, **kwargs: object
    ) -> ProjectOutcome:
        return cls(
            project_name=project_name,
            project_path=project_path,
            failure_kind=kind,
            message=message,
            **kwargs,  # type: ignore[arg-type]
        )


Status = Literal["success", "partial", "failed", "aborted", "no_projects"]


@dataclass
class PipelineResult:
    """Everything one pipeline run produced.

    ``message`` is the single outcome string shown to the user.
    """

    status: Status
    message: str
    state: PipelineState = PipelineState.DONE
    projects: list[ProjectOutcome] = field(default_factory=list)
    run_id: str | None = None

    @property
    def succeeded_count(self) -> int:
        return sum(1 for p in self.projects if p.succeeded)

    @property
    def failed_count(self) -> int:
        return sum(1 for p in self.projects if not p.succeeded)

    @property
    def any_report(self) -> bool:
        return self.succeeded_count > 0


def aggregate(outcomes: list[ProjectOutcome]) -> tuple[Status, str]:
    """Fold per-project outcomes into the overall status and message.

    - nothing succeeded: the first failure's message, verbatim
    - some failed: ``Coverage generated for {ok}/{total} projects. Last error: ...``
      where "last" follows input order
    - all succeeded: ``SUCCESS``
    """
    failures = [o for o in outcomes if not o.succeeded]
    succeeded = len(outcomes) - len(failures)

    if not outcomes:
        return "no_projects", NO_PROJECTS_SELECTED
    if succeeded == 0:
        return "failed", failures[0].message
    if failures:
        return (
            "partial",
            f"Coverage generated for {succeeded}/{len(outcomes)} projects. "
            f"Last error: {failures[-1].message}",
        )
    return "success", SUCCESS
