"""Shared test fixtures for copilot-templates."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from copilot_templates.config.loader import CONFIG_ENV_VAR
from copilot_templates.config.models import ENV_PREFIX

SECTIONS_BODY = """
## Role / Identity

You are a helpful engineer.

## Context & Tech Stack

Python 3.12.

## Project Layout

src/ and tests/.

## Coding Standards

Type hints everywhere.

## Workflow & Commands

pytest -q
"""


def render_template(
    *,
    title: str | None = "Sample",
    category: str | None = "language",
    tags: str | None = '["python", "backend"]',
    difficulty: str | None = "beginner",
    extra: str = "",
    body: str = SECTIONS_BODY,
    frontmatter: bool = True,
) -> str:
    """Build template text; pass None to leave a field out."""
    if not frontmatter:
        return f"# Sample\n{body}"
    lines = []
    if title is not None:
        lines.append(f'title: "{title}"')
    if category is not None:
        lines.append(f"category: {category}")
    if tags is not None:
        lines.append(f"tags: {tags}")
    if difficulty is not None:
        lines.append(f"difficulty: {difficulty}")
    if extra:
        lines.append(extra.strip("\n"))
    block = "\n".join(lines)
    return f"---\n{block}\n---\n\n# Sample\n{body}"


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of config resolution."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    for name in ("TEMPLATES_DIR", "PATTERN", "BASE_TEMPLATE", "OUTPUT", "DEFAULT_TEMPLATES", "LOG_LEVEL"):
        monkeypatch.delenv(f"{ENV_PREFIX}{name}", raising=False)


@pytest.fixture
def write_template(tmp_path: Path) -> Callable[..., Path]:
    """Write a template under tmp_path/templates/<relative> and return its path."""

    def _write(relative: str, text: str | None = None, **kwargs: object) -> Path:
        path = tmp_path / "templates" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        content = text if text is not None else render_template(**kwargs)  # type: ignore[arg-type]
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def render() -> Callable[..., str]:
    return render_template
