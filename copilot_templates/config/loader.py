"""Locate and read the .copilot-templates.yaml config file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

CONFIG_ENV_VAR = "COPILOT_TEMPLATES_CONFIG"


class ConfigLoadError(ValueError):
    """Raised when the config file cannot be read or is not a YAML mapping."""


class YAMLConfigLoader:
    """Read the project config file.

    Directory settings written in the file are relative to the file itself,
    so a config kept at a project root works from any working directory.
    """

    DEFAULT_FILENAME = ".copilot-templates.yaml"
    # Keys whose relative values are anchored at the config file's directory.
    PATH_KEYS = ("templates_dir",)

    @classmethod
    def resolve_path(cls, cli_path: str | None = None) -> Path:
        """Pick the config file: $COPILOT_TEMPLATES_CONFIG, then --config, then ./.copilot-templates.yaml."""
        env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
        if env_path:
            return Path(env_path)
        if cli_path and cli_path.strip():
            return Path(cli_path.strip())
        return Path.cwd() / cls.DEFAULT_FILENAME

    @classmethod
    def load_dict(cls, path: str | Path | None = None) -> dict[str, Any]:
        """Return the file's settings. A missing or empty file yields ``{}``."""
        target = Path(path) if path is not None else cls.resolve_path()
        try:
            text = target.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise ConfigLoadError(f"Cannot read config {target}: {exc}") from exc

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            mark = getattr(exc, "problem_mark", None)
            where = f":{mark.line + 1}:{mark.column + 1}" if mark is not None else ""
            raise ConfigLoadError(f"Invalid YAML at {target}{where}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Config root must be mapping: {target}")
        return cls.anchor_paths(data, target.parent)

    @classmethod
    def anchor_paths(cls, data: dict[str, Any], base: Path) -> dict[str, Any]:
        """Rewrite relative directory settings to sit under ``base``."""
        anchored = dict(data)
        for key in cls.PATH_KEYS:
            value = anchored.get(key)
            if isinstance(value, str) and value.strip() and not Path(value).is_absolute():
                anchored[key] = str(base / value)
        return anchored
