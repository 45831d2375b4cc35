"""copilot-instructions-templates validate — check template structure and metadata."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from copilot_templates.cli.common import build_catalog, console, get_settings
from copilot_templates.templates import (
    Classification,
    TemplateCatalog,
    TemplateLoadError,
    TemplateValidator,
    ValidationError,
    ValidationResult,
    summarize,
)

_RULE = "─" * 50


def _known_identifiers(catalog: TemplateCatalog) -> set[str] | None:
    """Identifiers of every template on disk, or None when there is no templates dir."""
    if not catalog.templates_dir.is_dir():
        return None
    everything = TemplateCatalog(
        templates_dir=catalog.templates_dir,
        pattern=catalog.pattern,
        base_template=catalog.base_template,
        include_base=True,
    )
    return {path.name.removesuffix(".md") for path in everything.discover()}


def _unreadable(path: Path, error: TemplateLoadError, strict: bool) -> ValidationResult:
    return ValidationResult(
        path=path,
        identifier=path.name.removesuffix(".md"),
        issues=[ValidationError(field="file", message=str(error), severity="error")],
        strict=strict,
    )


def _print_result(result: ValidationResult) -> None:
    label = escape(str(result.path))
    classification = result.classification
    if classification is Classification.VALID:
        console.print(f"[green]OK:[/green] {label}")
    elif classification is Classification.VALID_WITH_WARNINGS:
        console.print(f"[yellow]WARN:[/yellow] {label}")
    else:
        console.print(f"[red]FAIL:[/red] {label}")
    for err in result.errors:
        console.print(f"[red]   Error: {escape(err.message)}[/red]")
    for warning in result.warnings:
        console.print(f"[yellow]   Warning: {escape(warning.message)}[/yellow]")


def validate_command(
    ctx: typer.Context,
    files: Annotated[
        list[str] | None,
        typer.Argument(help="Template files to validate. Defaults to every discovered template."),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", "-s", help="Treat warnings as errors."),
    ] = False,
    include_base: Annotated[
        bool,
        typer.Option("--include-base", help="Also validate the base template when discovering."),
    ] = False,
) -> None:
    """Validate template structure and metadata."""
    settings = get_settings(ctx)
    catalog = build_catalog(settings, include_base=include_base)

    console.print("\n[bold blue]Validating Templates[/bold blue]\n")
    if files:
        paths = [Path(f) for f in files]
    else:
        paths = catalog.discover()
        for warning in catalog.warnings:
            console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")

    if not paths:
        console.print("[yellow]No templates found to validate.[/yellow]")
        return

    validator = TemplateValidator(known_ids=_known_identifiers(catalog))
    results: list[ValidationResult] = []
    for path in paths:
        try:
            record = catalog.load_file(path)
        except TemplateLoadError as e:
            result = _unreadable(path, e, strict)
        else:
            result = validator.validate(record, strict=strict)
        results.append(result)
        _print_result(result)

    summary = summarize(results)
    console.print("\n[bold blue]Validation Results[/bold blue]")
    console.print(f"[dim]{_RULE}[/dim]")
    console.print(f"  Total files: {summary.total}")
    console.print(f"[green]  Valid: {summary.valid}[/green]")
    console.print(f"[red]  Invalid: {summary.invalid}[/red]")
    if summary.with_warnings:
        console.print(f"[yellow]  With warnings: {summary.with_warnings}[/yellow]")

    if not summary.passed:
        console.print("\n[red]Validation failed[/red]\n")
        raise typer.Exit(1)
    console.print("\n[green]All templates are valid[/green]\n")
