"""Core module exports."""

from nscover.core.errors import (
    ConfigError,
    ErrorCode,
    NscoverError,
    PipelineError,
    SolutionError,
    StoreError,
)
from nscover.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from nscover.core.progress import spinner, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "NscoverError",
    "PipelineError",
    "SolutionError",
    "StoreError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "spinner",
    "status",
]
