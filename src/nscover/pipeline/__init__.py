"""Coverage generation pipeline."""

from nscover.pipeline.artifacts import find_coverage_artifact
from nscover.pipeline.commands import format_filter
from nscover.pipeline.models import (
    INVALID_SOLUTION,
    NO_PROJECTS_SELECTED,
    SUCCESS,
    TOOL_UNAVAILABLE,
    PipelineResult,
    PipelineState,
    ProjectOutcome,
)
from nscover.pipeline.pipeline import CoveragePipeline
from nscover.pipeline.process import ProcessResult, ProcessRunner
from nscover.pipeline.tools import ReportToolProvisioner

__all__ = [
    "CoveragePipeline",
    "INVALID_SOLUTION",
    "NO_PROJECTS_SELECTED",
    "PipelineResult",
    "PipelineState",
    "ProcessResult",
    "ProcessRunner",
    "ProjectOutcome",
    "ReportToolProvisioner",
    "SUCCESS",
    "TOOL_UNAVAILABLE",
    "find_coverage_artifact",
    "format_filter",
]
