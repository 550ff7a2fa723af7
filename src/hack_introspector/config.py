"""Configuration loading and validation."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class ApiConfig(BaseModel):
    """Backend API configuration."""

    base_url: str = "http://localhost:8080"
    base_url_env: str = "INTROSPECTOR_API_URL"
    timeout_seconds: float = Field(default=60.0, gt=0)

    def resolve_base_url(self) -> str:
        """Return the base URL, preferring the environment override when set."""
        return os.environ.get(self.base_url_env) or self.base_url


class DashboardConfig(BaseModel):
    """Dashboard rendering configuration."""

    default_preset: str = Field(default="all", pattern=r"^(all|7d|30d|90d|1y)$")
    top_contributors: int = Field(default=10, ge=1)
    language_colors: dict[str, str] = Field(default_factory=dict)

    @field_validator("language_colors")
    @classmethod
    def validate_colors(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate that overrides are #rrggbb colors."""
        for name, color in v.items():
            if not _HEX_COLOR.match(color):
                msg = f"Invalid color '{color}' for language '{name}'"
                raise ValueError(msg)
        return v


class Config(BaseModel):
    """Root configuration model."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)


def load_config(path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValidationError: If the config is invalid.
    """
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        raw_config: dict[str, Any] = yaml.safe_load(f) or {}

    return Config.model_validate(raw_config)
