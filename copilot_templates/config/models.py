"""Configuration models for copilot-templates."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from copilot_templates.config.loader import ConfigLoadError, YAMLConfigLoader

ENV_PREFIX = "COPILOT_TEMPLATES_"


class TemplatesConfig(BaseSettings):
    """Root configuration for the templates CLI."""

    templates_dir: str = Field(default="templates", description="Directory searched for templates.")
    pattern: str = Field(default="**/*.md", description="Glob pattern relative to templates_dir.")
    base_template: str = Field(default="_base-template.md", description="Skeleton template filename.")
    output: str = Field(default=".github/copilot-instructions.md", description="Default init output path.")
    default_templates: list[str] = Field(
        default_factory=list,
        description="Template ids combined by `init --no-interactive` when none are given.",
    )
    log_level: str = Field(default="WARNING")

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper() or "WARNING"

    @property
    def templates_path(self) -> Path:
        return Path(self.templates_dir)


def _env_keys() -> set[str]:
    return {
        name
        for name in TemplatesConfig.model_fields
        if f"{ENV_PREFIX}{name.upper()}" in os.environ
    }


def load_config(path: str | Path | None = None) -> TemplatesConfig:
    """Build settings from the YAML file with environment variables taking priority."""
    target = Path(path) if path is not None else YAMLConfigLoader.resolve_path()
    file_values: dict[str, Any] = YAMLConfigLoader.load_dict(target)
    # Init kwargs outrank env in pydantic-settings; drop keys the env sets.
    overridden = _env_keys()
    values = {k: v for k, v in file_values.items() if k not in overridden}
    try:
        return TemplatesConfig(**values)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid config {target}: {exc}") from exc
