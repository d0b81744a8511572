"""Engine configuration loaded from YAML."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sessionreel.errors import ConfigError

DEFAULT_STORAGE_DIR = Path(".sessionreel/recordings")


class SessionReelConfig(BaseModel):
    """Settings shared by the engine and the CLI."""

    model_config = ConfigDict(extra="forbid")

    storage_dir: Path = Field(DEFAULT_STORAGE_DIR, description="Directory holding recordings")
    record_boundary_messages: bool = Field(
        False, description="Keep session start/end marker messages in recordings"
    )
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{value}'")
        return level


def load_config(path: Path | None = None) -> SessionReelConfig:
    """Load configuration from a YAML file.

    Args:
        path: YAML file; defaults are used when None

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file cannot be read or does not validate
    """
    if path is None:
        return SessionReelConfig()

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    try:
        return SessionReelConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e
