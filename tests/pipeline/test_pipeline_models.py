"""Tests for outcome aggregation."""

from nscover.pipeline.models import (
    NO_PROJECTS_SELECTED,
    SUCCESS,
    PipelineResult,
    ProjectOutcome,
    aggregate,
)


def _ok(name: str) -> ProjectOutcome:
    return ProjectOutcome(project_name=name, project_path=f"/{name}.csproj", succeeded=True)


def _failed(name: str, message: str) -> ProjectOutcome:
    return ProjectOutcome.failure(name, f"/{name}.csproj", "test_failed", message)


class TestAggregate:
    def test_all_succeeded(self) -> None:
        assert aggregate([_ok("a"), _ok("b")]) == ("success", SUCCESS)

    def test_none_succeeded_uses_first_failure(self) -> None:
        status, message = aggregate([_failed("a", "first"), _failed("b", "second")])

        assert status == "failed"
        assert message == "first"

    def test_partial_uses_last_failure(self) -> None:
        status, message = aggregate(
            [_failed("a", "early"), _ok("b"), _failed("c", "late"), _ok("d")]
        )

        assert status == "partial"
        assert message == "Coverage generated for 2/4 projects. Last error: late"

    def test_empty(self) -> None:
        assert aggregate([]) == ("no_projects", NO_PROJECTS_SELECTED)


class TestPipelineResult:
    def test_counts(self) -> None:
        result = PipelineResult(
            status="partial", message="", projects=[_ok("a"), _failed("b", "x")]
        )

        assert result.succeeded_count == 1
        assert result.failed_count == 1
        assert result.any_report

    def test_no_projects_has_no_report(self) -> None:
        assert not PipelineResult(status="aborted", message="x").any_report
