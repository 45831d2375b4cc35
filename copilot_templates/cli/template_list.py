"""copilot-instructions-templates list — show templates grouped by category."""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.markup import escape

from copilot_templates.cli.common import build_catalog, console, get_settings
from copilot_templates.templates import TemplateRecord, filter_records, group_by_category
from copilot_templates.templates.validator import VALID_CATEGORIES, VALID_DIFFICULTIES

_DIFFICULTY_ICONS = {
    "beginner": "★",
    "intermediate": "★★",
    "advanced": "★★★",
}
_RULE = "─" * 50


def difficulty_icon(difficulty: str | None) -> str:
    return _DIFFICULTY_ICONS.get(difficulty or "", "•")


def _record_row(record: TemplateRecord) -> dict[str, object]:
    return {
        "id": record.identifier,
        "title": record.display_name,
        "category": record.category,
        "difficulty": record.difficulty,
        "tags": record.tags,
        "primaryTech": record.primary_tech,
        "path": str(record.path),
        "structurallyValid": record.is_structurally_valid,
    }


def _warn_unknown(name: str, value: str, allowed: tuple[str, ...]) -> None:
    if value and value not in allowed:
        console.print(
            f"[yellow]Warning:[/yellow] unknown {name} '{escape(value)}'. Use: {', '.join(allowed)}."
        )


def _print_record(record: TemplateRecord) -> None:
    console.print(f"\n{difficulty_icon(record.difficulty)} [bold cyan]{escape(record.display_name)}[/bold cyan]")
    console.print(f"  [dim]ID:[/dim] {escape(record.identifier)}")
    tags = ", ".join(record.tags[:3])
    if tags:
        console.print(f"  [dim]Tags:[/dim] {escape(tags)}")
    if record.primary_tech:
        console.print(f"  [dim]Tech:[/dim] {escape(record.primary_tech)}")
    console.print(f"  [dim]Path:[/dim] {escape(str(record.path))}")


def list_command(
    ctx: typer.Context,
    category: Annotated[
        str,
        typer.Option("--category", "-c", help="Filter by category (language, framework, role).", is_flag=False),
    ] = "",
    tag: Annotated[str, typer.Option("--tag", "-t", help="Filter by tag.", is_flag=False)] = "",
    difficulty: Annotated[
        str,
        typer.Option(
            "--difficulty",
            "-d",
            help="Filter by difficulty (beginner, intermediate, advanced).",
            is_flag=False,
        ),
    ] = "",
    json_output: Annotated[bool, typer.Option("--json", help="Output in JSON format.")] = False,
) -> None:
    """List available templates."""
    settings = get_settings(ctx)
    category = category.strip().lower()
    difficulty = difficulty.strip().lower()
    tag = tag.strip()

    catalog = build_catalog(settings)
    loaded = catalog.load()
    filtered = filter_records(
        loaded.records,
        category=category or None,
        tag=tag or None,
        difficulty=difficulty or None,
    )

    if json_output:
        typer.echo(json.dumps([_record_row(r) for r in filtered], indent=2, ensure_ascii=False))
        return

    console.print("\n[bold blue]GitHub Copilot Instruction Templates[/bold blue]")
    for warning in loaded.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    for failure in loaded.load_errors:
        console.print(f"[yellow]Skipped:[/yellow] {escape(str(failure.path))}: {escape(failure.message)}")
    _warn_unknown("category", category, VALID_CATEGORIES)
    _warn_unknown("difficulty", difficulty, VALID_DIFFICULTIES)

    if not filtered:
        console.print("[yellow]No templates found matching the criteria.[/yellow]")
        return

    for group, records in group_by_category(filtered).items():
        console.print(f"\n[bold green]{escape(group.upper())}S[/bold green]")
        console.print(f"[dim]{_RULE}[/dim]")
        for record in records:
            _print_record(record)

    console.print(f"\n\n[bold blue]Total: {len(filtered)} template(s)[/bold blue]\n")
    console.print("[dim]Usage:[/dim]")
    console.print("[dim]  copilot-instructions-templates init                       # Initialize in your project[/dim]")
    console.print("[dim]  copilot-instructions-templates list --category=framework  # Filter by category[/dim]")
    console.print("[dim]  copilot-instructions-templates validate                   # Validate templates[/dim]")
