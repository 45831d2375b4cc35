"""Required section detection for instruction templates."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Headings every template body must contain, in canonical order.
REQUIRED_SECTIONS: tuple[str, ...] = (
    "Role / Identity",
    "Context & Tech Stack",
    "Project Layout",
    "Coding Standards",
    "Workflow & Commands",
)

_SEPARATORS = "/&"


def _compile_section(name: str) -> re.Pattern[str]:
    """Build a line matcher for a heading name.

    Words are separated by flexible whitespace; a ``/`` or ``&`` in the name
    becomes an optional separator with flexible whitespace around it.
    """
    tokens = name.split()
    parts: list[str] = []
    pending_sep = False
    for token in tokens:
        if token in _SEPARATORS:
            pending_sep = True
            continue
        if parts:
            parts.append(r"\s*[/&]?\s*" if pending_sep else r"\s+")
        parts.append(re.escape(token))
        pending_sep = False
    return re.compile(r"^##\s+" + "".join(parts), re.IGNORECASE)


_SECTION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (name, _compile_section(name)) for name in REQUIRED_SECTIONS
)


@dataclass(frozen=True)
class StructureReport:
    """Which required headings a document contains."""

    found: dict[str, bool]

    @property
    def missing(self) -> list[str]:
        return [name for name, ok in self.found.items() if not ok]

    @property
    def is_valid(self) -> bool:
        return all(self.found.values())


def check_structure(text: str) -> StructureReport:
    """Scan ``text`` line by line for the required section headings."""
    found = {name: False for name, _ in _SECTION_PATTERNS}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped.startswith("##"):
            continue
        for name, pattern in _SECTION_PATTERNS:
            if not found[name] and pattern.match(stripped):
                found[name] = True
    return StructureReport(found=found)


def section_heading(name: str) -> str:
    """Canonical Markdown heading for a required section."""
    return f"## {name}"
