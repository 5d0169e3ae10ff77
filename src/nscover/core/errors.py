"""nscover error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Solution parsing
- 4xxx: Pipeline
- 5xxx: Selection store
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Solution (3xxx)
    SOLUTION_NOT_FOUND = 3001
    SOLUTION_UNSUPPORTED = 3002
    SOLUTION_PARSE_ERROR = 3003
    SOLUTION_NOT_LOADED = 3004
    SOLUTION_PROJECT_NOT_FOUND = 3005

    # Pipeline (4xxx)
    PIPELINE_INVALID_SOLUTION = 4001
    PIPELINE_TOOL_UNAVAILABLE = 4002
    PIPELINE_BUILD_FAILED = 4003
    PIPELINE_NO_PROJECTS = 4004

    # Store (5xxx)
    STORE_UNAVAILABLE = 5001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class NscoverError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(NscoverError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class SolutionError(NscoverError):
    """Errors raised while reading a solution file."""

    @classmethod
    def not_found(cls, path: str) -> "SolutionError":
        return cls(
            code=ErrorCode.SOLUTION_NOT_FOUND,
            message=f"Solution file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def unsupported(cls, path: str) -> "SolutionError":
        return cls(
            code=ErrorCode.SOLUTION_UNSUPPORTED,
            message=f"Not a solution file: {path}",
            details={"path": path},
        )

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "SolutionError":
        return cls(
            code=ErrorCode.SOLUTION_PARSE_ERROR,
            message=f"Failed to parse solution {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def not_loaded(cls) -> "SolutionError":
        return cls(code=ErrorCode.SOLUTION_NOT_LOADED, message="No solution loaded")

    @classmethod
    def project_not_found(cls, key: str) -> "SolutionError":
        return cls(
            code=ErrorCode.SOLUTION_PROJECT_NOT_FOUND,
            message=f"Project not found in solution: {key}",
            details={"project": key},
        )


class PipelineError(NscoverError):
    """Failures that abort the whole coverage pipeline.

    The message is the outcome string handed back to the caller.
    """

    @classmethod
    def invalid_solution(cls, message: str, path: str | None) -> "PipelineError":
        return cls(
            code=ErrorCode.PIPELINE_INVALID_SOLUTION,
            message=message,
            details={"path": path},
        )

    @classmethod
    def tool_unavailable(cls, message: str, tool: str) -> "PipelineError":
        return cls(
            code=ErrorCode.PIPELINE_TOOL_UNAVAILABLE,
            message=message,
            details={"tool": tool},
        )

    @classmethod
    def build_failed(cls, message: str, exit_code: int | None) -> "PipelineError":
        return cls(
            code=ErrorCode.PIPELINE_BUILD_FAILED,
            message=message,
            details={"exit_code": exit_code},
        )

    @classmethod
    def no_projects(cls, message: str) -> "PipelineError":
        return cls(code=ErrorCode.PIPELINE_NO_PROJECTS, message=message)


class StoreError(NscoverError):
    """Selection store errors."""

    @classmethod
    def unavailable(cls, path: str, reason: str) -> "StoreError":
        return cls(
            code=ErrorCode.STORE_UNAVAILABLE,
            message=f"Selection store unavailable at {path}: {reason}",
            details={"path": path, "reason": reason},
        )
