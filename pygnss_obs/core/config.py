"""
Configuration management for PyGNSS-Obs.

Uses Pydantic for validation and supports YAML configuration files
with environment variable expansion.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pygnss_obs.core.exceptions import ConfigurationError


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in strings."""
    if isinstance(value, str):
        return os.path.expandvars(value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(v) for v in value]
    return value


class ParserConfig(BaseModel):
    """RINEX observation parser configuration."""

    encoding: str = "utf-8"
    encoding_errors: str = "ignore"
    # RINEX 2 records hold at most five observations per physical line
    rinex2_wrap_observations: bool = False
    year_pivot: int = Field(default=80, ge=0, le=99)

    @field_validator("encoding_errors")
    @classmethod
    def check_encoding_errors(cls, v: str) -> str:
        allowed = {"strict", "ignore", "replace", "surrogateescape"}
        if v not in allowed:
            raise ValueError(f"encoding_errors must be one of {sorted(allowed)}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    log_dir: Path | None = None
    log_to_file: bool = False
    log_to_console: bool = True
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def check_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """Main settings container."""

    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="PYGNSS_OBS_",
        env_nested_delimiter="__",
    )


def _default_search_paths() -> list[Path]:
    return [
        Path("config/settings.local.yaml"),
        Path("config/settings.yaml"),
        Path.home() / ".pygnss_obs" / "settings.yaml",
    ]


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML file.

    Args:
        config_path: Path to YAML configuration file.
                    If None, tries default locations.

    Returns:
        Settings instance.

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    search_paths = [Path(config_path)] if config_path else _default_search_paths()

    config_data: dict[str, Any] = {}

    for path in search_paths:
        if path.exists():
            try:
                with open(path) as f:
                    raw_data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
            if raw_data:
                if not isinstance(raw_data, dict):
                    raise ConfigurationError(f"Expected a mapping in {path}")
                config_data = expand_env_vars(raw_data)
            break

    try:
        return Settings(**config_data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
