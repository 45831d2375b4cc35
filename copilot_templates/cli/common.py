"""Shared helpers for CLI commands."""

from __future__ import annotations

import typer
from rich.console import Console

from copilot_templates.config import ConfigLoadError, TemplatesConfig, load_config
from copilot_templates.templates import TemplateCatalog

console = Console(highlight=False, soft_wrap=True, emoji=False)


def get_settings(ctx: typer.Context | None) -> TemplatesConfig:
    """Return settings loaded by the root callback, loading defaults when absent."""
    if ctx is not None and isinstance(ctx.obj, TemplatesConfig):
        return ctx.obj
    try:
        return load_config()
    except ConfigLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from e


def build_catalog(settings: TemplatesConfig, include_base: bool = False) -> TemplateCatalog:
    return TemplateCatalog(
        templates_dir=settings.templates_path,
        pattern=settings.pattern,
        base_template=settings.base_template,
        include_base=include_base,
    )
