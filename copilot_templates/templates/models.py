"""Core data models for the instruction template library."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from copilot_templates.templates.structure import StructureReport, check_structure


class TemplateCategory(str, Enum):
    """Template category for classification."""

    LANGUAGE = "language"
    FRAMEWORK = "framework"
    ROLE = "role"


class TemplateDifficulty(str, Enum):
    """How much prior experience a template assumes."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Classification(str, Enum):
    """Outcome of validating one template."""

    VALID = "valid"
    VALID_WITH_WARNINGS = "valid-with-warnings"
    INVALID = "invalid"


@dataclass(frozen=True)
class TemplateRecord:
    """A template file loaded from disk.

    Records are built once per catalog load and never mutated. Structural
    validity is derived from ``raw_text`` on access so it cannot drift from
    the text it describes.
    """

    path: Path
    identifier: str  # filename without ".md"
    metadata: dict[str, Any] | None
    raw_text: str
    parse_warnings: tuple[str, ...] = ()
    is_base: bool = False

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def structure(self) -> StructureReport:
        return check_structure(self.raw_text)

    @property
    def is_structurally_valid(self) -> bool:
        return self.structure.is_valid

    def _meta_str(self, key: str) -> str | None:
        if not self.metadata:
            return None
        value = self.metadata.get(key)
        return value if isinstance(value, str) else None

    @property
    def title(self) -> str | None:
        return self._meta_str("title")

    @property
    def category(self) -> str | None:
        return self._meta_str("category")

    @property
    def difficulty(self) -> str | None:
        return self._meta_str("difficulty")

    @property
    def primary_tech(self) -> str | None:
        return self._meta_str("primaryTech")

    @property
    def tags(self) -> list[str]:
        if not self.metadata:
            return []
        value = self.metadata.get("tags")
        if not isinstance(value, list):
            return []
        return [str(t) for t in value]

    @property
    def deprecated(self) -> bool:
        if not self.metadata:
            return False
        return self.metadata.get("deprecated") is True

    @property
    def display_name(self) -> str:
        return self.title or self.filename


@dataclass(frozen=True)
class LoadError:
    """A file that could not be read during a catalog load."""

    path: Path
    message: str


@dataclass
class CatalogLoadResult:
    """Records produced by one catalog load plus the per-file failures."""

    records: list[TemplateRecord] = field(default_factory=list)
    load_errors: list[LoadError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class ValidationError:
    """A single validation error (not an exception)."""

    field: str
    message: str
    severity: str  # "error" or "warning"


@dataclass
class ValidationResult:
    """Validation outcome for one template."""

    path: Path
    identifier: str
    issues: list[ValidationError] = field(default_factory=list)
    strict: bool = False

    @property
    def errors(self) -> list[ValidationError]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationError]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def classification(self) -> Classification:
        if self.errors:
            return Classification.INVALID
        if self.warnings:
            return Classification.VALID_WITH_WARNINGS
        return Classification.VALID

    @property
    def valid(self) -> bool:
        return self.classification is not Classification.INVALID


@dataclass(frozen=True)
class ValidationSummary:
    """Aggregate counts for a validation run."""

    total: int
    valid: int
    invalid: int
    with_warnings: int

    @property
    def passed(self) -> bool:
        return self.invalid == 0
