"""Copilot instruction template library — catalog, parsing, validation."""

from copilot_templates.templates.catalog import (
    TemplateCatalog,
    filter_records,
    group_by_category,
)
from copilot_templates.templates.combiner import combine_templates, compatibility_warnings
from copilot_templates.templates.exceptions import (
    TemplateError,
    TemplateLoadError,
    TemplateNotFoundError,
)
from copilot_templates.templates.frontmatter import (
    FrontmatterParseResult,
    ParseStatus,
    extract_frontmatter,
    parse_frontmatter,
    strip_frontmatter,
)
from copilot_templates.templates.models import (
    CatalogLoadResult,
    Classification,
    LoadError,
    TemplateCategory,
    TemplateDifficulty,
    TemplateRecord,
    ValidationError,
    ValidationResult,
    ValidationSummary,
)
from copilot_templates.templates.structure import REQUIRED_SECTIONS, StructureReport, check_structure
from copilot_templates.templates.validator import TemplateValidator, summarize

__all__ = [
    "CatalogLoadResult",
    "Classification",
    "FrontmatterParseResult",
    "LoadError",
    "ParseStatus",
    "REQUIRED_SECTIONS",
    "StructureReport",
    "TemplateCatalog",
    "TemplateCategory",
    "TemplateDifficulty",
    "TemplateError",
    "TemplateLoadError",
    "TemplateNotFoundError",
    "TemplateRecord",
    "TemplateValidator",
    "ValidationError",
    "ValidationResult",
    "ValidationSummary",
    "check_structure",
    "combine_templates",
    "compatibility_warnings",
    "extract_frontmatter",
    "filter_records",
    "group_by_category",
    "parse_frontmatter",
    "strip_frontmatter",
    "summarize",
]
