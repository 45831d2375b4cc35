"""copilot-instructions-templates init — combine templates into copilot-instructions.md."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from copilot_templates.cli.common import build_catalog, console, get_settings
from copilot_templates.templates import (
    TemplateNotFoundError,
    TemplateRecord,
    combine_templates,
    compatibility_warnings,
)


def _split_ids(values: list[str]) -> list[str]:
    """Accept repeated options and comma-separated lists alike."""
    ids: list[str] = []
    for value in values:
        for part in value.split(","):
            part = part.strip()
            if part and part not in ids:
                ids.append(part)
    return ids


def _parse_selection(raw: str, count: int) -> list[int]:
    """Parse "1, 3" into zero-based indexes. Raises ValueError on bad input."""
    indexes: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        number = int(part)
        if number < 1 or number > count:
            raise ValueError(f"selection out of range: {number}")
        if number - 1 not in indexes:
            indexes.append(number - 1)
    if not indexes:
        raise ValueError("no templates selected")
    return indexes


def _run_interactive_selection(records: list[TemplateRecord]) -> list[str]:
    """Show numbered templates and prompt for a comma-separated selection."""
    typer.echo("\nAvailable templates:")
    for i, record in enumerate(records, 1):
        category = record.category or "unknown"
        typer.echo(f"  {i}. {record.identifier} - {record.display_name} ({category})")

    raw = typer.prompt(f"Select templates (comma-separated, 1-{len(records)})", default="1")
    try:
        indexes = _parse_selection(raw, len(records))
    except ValueError as e:
        typer.echo(f"Error: invalid selection '{raw}': {e}", err=True)
        raise typer.Exit(2) from e
    return [records[i].identifier for i in indexes]


def init_command(
    ctx: typer.Context,
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Output path (default: .github/copilot-instructions.md).", is_flag=False),
    ] = "",
    no_interactive: Annotated[
        bool,
        typer.Option("--no-interactive", help="Skip interactive prompts; use --template or configured defaults."),
    ] = False,
    template: Annotated[
        list[str] | None,
        typer.Option("--template", "-t", help="Template id to include (repeatable or comma-separated).", is_flag=False),
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite the output file if present.")] = False,
) -> None:
    """Initialize Copilot instructions in your project."""
    settings = get_settings(ctx)
    catalog = build_catalog(settings)
    loaded = catalog.load()
    for failure in loaded.load_errors:
        console.print(f"[yellow]Skipped:[/yellow] {escape(str(failure.path))}: {escape(failure.message)}")

    if template:
        template_ids = _split_ids(template)
    elif no_interactive:
        template_ids = _split_ids(settings.default_templates)
    else:
        records = sorted(loaded.records, key=lambda r: ((r.category or "~"), r.identifier))
        if not records:
            typer.echo("No templates found.", err=True)
            raise typer.Exit(1)
        template_ids = _run_interactive_selection(records)

    if not template_ids:
        typer.echo(
            "Error: no templates selected. Pass --template or set default_templates in the config.",
            err=True,
        )
        raise typer.Exit(2)

    selected: list[TemplateRecord] = []
    for template_id in template_ids:
        try:
            selected.append(catalog.get_or_raise(template_id))
        except TemplateNotFoundError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(2) from e

    for warning in compatibility_warnings(selected):
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    for record in selected:
        if record.deprecated:
            message = (record.metadata or {}).get("deprecationMessage") or "no replacement given"
            console.print(f"[yellow]Warning:[/yellow] '{escape(record.identifier)}' is deprecated: {escape(str(message))}")

    output_path = Path(output or settings.output)
    if output_path.exists() and not force:
        typer.echo(f"Error: {output_path} already exists. Use --force to overwrite.", err=True)
        raise typer.Exit(2)

    content = combine_templates(selected)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot write {output_path}: {e}", err=True)
        raise typer.Exit(1) from e

    console.print(f"[green]Created[/green] {escape(str(output_path))} from {len(selected)} template(s)")
