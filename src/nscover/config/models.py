"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (NSCOVER__SECTION__KEY)
3. Solution YAML (<solution dir>/.nscover/config.yaml)
4. Global YAML (~/.config/nscover/config.yaml)
5. Built-in defaults (this file)

Examples:
    NSCOVER__LOGGING__LEVEL=DEBUG
    NSCOVER__TOOLS__DOTNET_EXECUTABLE=/usr/share/dotnet/dotnet
    NSCOVER__HISTORY__RECENT_LIMIT=20
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from nscover.config.constants import (
    COVERAGE_ARTIFACT_NAME,
    REPORT_DIR_NAME,
    REPORT_HISTORY_DIR_NAME,
    REPORT_TOOL_COMMAND,
    REPORT_TOOL_PACKAGE_ID,
    RESULTS_DIR_HINT,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        NSCOVER__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(default="WARNING", description="Root log level.")
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ToolsConfig(BaseModel):
    """External executables.

    Env vars:
        NSCOVER__TOOLS__DOTNET_EXECUTABLE: dotnet CLI used for build, test and tool commands
        NSCOVER__TOOLS__REPORT_EXECUTABLE: report generator command
        NSCOVER__TOOLS__REPORT_PACKAGE_ID: global tool package to list/install
    """

    dotnet_executable: str = Field(default="dotnet", description="dotnet CLI executable.")
    report_executable: str = Field(
        default=REPORT_TOOL_COMMAND,
        description="Report generator command. Global tools live in ~/.dotnet/tools; "
        "set an absolute path when that directory is not on PATH.",
    )
    report_package_id: str = Field(
        default=REPORT_TOOL_PACKAGE_ID,
        description="Package id searched for in 'dotnet tool list --global' output.",
    )


class PipelineConfig(BaseModel):
    """Coverage pipeline settings.

    Env vars:
        NSCOVER__PIPELINE__REPORT_TYPES: Report generator output format
    """

    solution_extensions: list[str] = Field(
        default_factory=lambda: [".slnx", ".sln"],
        description="Solution file extensions accepted by the pipeline.",
    )
    artifact_name: str = Field(
        default=COVERAGE_ARTIFACT_NAME,
        description="Canonical filename of the coverage artifact written by the collector.",
    )
    results_hint: str = Field(
        default=RESULTS_DIR_HINT,
        description="Directory name searched for when the artifact path is not printed.",
    )
    report_dir_name: str = Field(default=REPORT_DIR_NAME)
    history_dir_name: str = Field(default=REPORT_HISTORY_DIR_NAME)
    report_types: str = Field(default="Html")

    @field_validator("solution_extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one solution extension is required")
        return [ext if ext.startswith(".") else f".{ext}" for ext in (e.lower() for e in v)]


class DatabaseConfig(BaseModel):
    """Selection store configuration.

    Env vars:
        NSCOVER__DATABASE__PATH: SQLite file holding selections and report history
        NSCOVER__DATABASE__BUSY_TIMEOUT_MS: SQLite busy timeout
    """

    path: str | None = Field(
        default=None,
        description="SQLite file. Default: ~/.local/share/nscover/nscover.sqlite.",
    )
    busy_timeout_ms: int = Field(default=30000)

    @field_validator("busy_timeout_ms")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Busy timeout must be >= 0, got {v}")
        return v


class HistoryConfig(BaseModel):
    """Recent-solution history.

    Env vars:
        NSCOVER__HISTORY__RECENT_LIMIT: Number of recent solutions listed
    """

    recent_limit: int = Field(default=10)

    @field_validator("recent_limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Recent limit must be >= 1, got {v}")
        return v


class NscoverConfig(BaseModel):
    """Root configuration for nscover."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
