"""Config module exports."""

from nscover.config.loader import get_database_path, load_config
from nscover.config.models import (
    DatabaseConfig,
    HistoryConfig,
    LoggingConfig,
    NscoverConfig,
    PipelineConfig,
    ToolsConfig,
)

__all__ = [
    "get_database_path",
    "load_config",
    "DatabaseConfig",
    "HistoryConfig",
    "LoggingConfig",
    "NscoverConfig",
    "PipelineConfig",
    "ToolsConfig",
]
