"""Configuration for copilot-templates."""

from copilot_templates.config.loader import ConfigLoadError, YAMLConfigLoader
from copilot_templates.config.models import TemplatesConfig, load_config

__all__ = [
    "ConfigLoadError",
    "TemplatesConfig",
    "YAMLConfigLoader",
    "load_config",
]
