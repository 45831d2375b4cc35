"""Combine selected templates into a single copilot-instructions document."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import combinations

from copilot_templates.templates.exceptions import TemplateError
from copilot_templates.templates.frontmatter import strip_frontmatter
from copilot_templates.templates.models import TemplateRecord

SECTION_SEPARATOR = "\n\n---\n\n"


def _combinable_with(record: TemplateRecord) -> list[str] | None:
    if not record.metadata:
        return None
    value = record.metadata.get("combinableWith")
    if not isinstance(value, list):
        return None
    return [str(v) for v in value]


def compatibility_warnings(records: Sequence[TemplateRecord]) -> list[str]:
    """Describe selected pairs that do not declare each other combinable.

    A template without ``combinableWith`` places no restriction.
    """
    warnings: list[str] = []
    for left, right in combinations(records, 2):
        for a, b in ((left, right), (right, left)):
            allowed = _combinable_with(a)
            if allowed is not None and b.identifier not in allowed:
                warnings.append(f"'{a.identifier}' does not list '{b.identifier}' in combinableWith")
    return warnings


def combine_templates(records: Sequence[TemplateRecord]) -> str:
    """Concatenate template bodies (frontmatter removed) into one document."""
    if not records:
        raise TemplateError("No templates selected")
    sources = ", ".join(r.identifier for r in records)
    bodies = [strip_frontmatter(r.raw_text).strip() for r in records]
    header = f"<!-- Generated by copilot-instructions-templates from: {sources} -->"
    return header + "\n\n" + SECTION_SEPARATOR.join(bodies) + "\n"
