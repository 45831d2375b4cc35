"""CLI tools — copilot-instructions-templates list, init, validate."""

import logging
import sys
from importlib import metadata
from typing import Annotated

import typer

from copilot_templates.cli.template_init import init_command
from copilot_templates.cli.template_list import list_command
from copilot_templates.cli.template_validate import validate_command
from copilot_templates.config import ConfigLoadError, YAMLConfigLoader, load_config

app = typer.Typer(
    name="copilot-instructions-templates",
    help="CLI tool for managing GitHub Copilot instruction templates.",
    no_args_is_help=True,
)

app.command("list")(list_command)
app.command("init")(init_command)
app.command("validate")(validate_command)


def _version_callback(value: bool) -> None:
    """Print installed package version and exit."""
    if not value:
        return
    try:
        version = metadata.version("copilot-templates")
    except metadata.PackageNotFoundError:
        version = "unknown"
    typer.echo(f"copilot-instructions-templates {version}")
    raise typer.Exit(0)


@app.callback()
def root(
    ctx: typer.Context,
    config: Annotated[
        str,
        typer.Option("--config", help="Path to config YAML (default: ./.copilot-templates.yaml).", is_flag=False),
    ] = "",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", help="Show version and exit.", callback=_version_callback, is_eager=True),
    ] = False,
) -> None:
    """Load configuration shared by every command."""
    try:
        settings = load_config(YAMLConfigLoader.resolve_path(config or None))
    except ConfigLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from e
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.getLogger("copilot_templates").setLevel(level)
    ctx.obj = settings


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(130)
