"""Configuration loading with pydantic-settings.

Precedence (first wins):
1. Direct kwargs
2. Environment variables (NSCOVER__SECTION__KEY)
3. Solution config (<solution dir>/.nscover/config.yaml)
4. Global config (~/.config/nscover/config.yaml)
5. Built-in defaults
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from nscover.config.constants import CONFIG_DIR_NAME
from nscover.config.models import (
    DatabaseConfig,
    HistoryConfig,
    LoggingConfig,
    NscoverConfig,
    PipelineConfig,
    ToolsConfig,
)
from nscover.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/nscover/config.yaml").expanduser()
DEFAULT_DATABASE_PATH = Path("~/.local/share/nscover/nscover.sqlite").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class bound to one YAML dict."""

    class NscoverSettings(BaseSettings):
        """Root config. Env vars: NSCOVER__LOGGING__LEVEL, NSCOVER__TOOLS__DOTNET_EXECUTABLE, etc."""

        model_config = SettingsConfigDict(
            env_prefix="NSCOVER__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        tools: ToolsConfig = ToolsConfig()
        pipeline: PipelineConfig = PipelineConfig()
        database: DatabaseConfig = DatabaseConfig()
        history: HistoryConfig = HistoryConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return NscoverSettings


def load_config(solution_dir: Path | None = None, **kwargs: Any) -> NscoverConfig:
    """Load config: defaults < global yaml < solution yaml < env vars < kwargs.

    Args:
        solution_dir: Directory holding the solution file. Its
                      ``.nscover/config.yaml`` is read when present.
        **kwargs: Override values (highest precedence).

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    yaml_config = _load_yaml(GLOBAL_CONFIG_PATH)
    if solution_dir is not None:
        local = _load_yaml(solution_dir / CONFIG_DIR_NAME / "config.yaml")
        yaml_config = _deep_merge(yaml_config, local)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return NscoverConfig.model_validate(settings.model_dump())


def get_database_path(config: NscoverConfig) -> Path:
    """Resolve the selection store location."""
    if config.database.path:
        return Path(config.database.path).expanduser()
    return DEFAULT_DATABASE_PATH
