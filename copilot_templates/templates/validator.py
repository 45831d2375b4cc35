"""Template validator — metadata schema and section structure checks."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from packaging.version import InvalidVersion, Version

from copilot_templates.templates.models import (
    Classification,
    TemplateCategory,
    TemplateDifficulty,
    TemplateRecord,
    ValidationError,
    ValidationResult,
    ValidationSummary,
)
from copilot_templates.templates.structure import check_structure, section_heading

logger = logging.getLogger(__name__)

VALID_CATEGORIES: tuple[str, ...] = tuple(c.value for c in TemplateCategory)
VALID_DIFFICULTIES: tuple[str, ...] = tuple(d.value for d in TemplateDifficulty)
LIST_FIELDS: tuple[str, ...] = ("requires", "combinableWith")

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _error(field: str, message: str) -> ValidationError:
    return ValidationError(field=field, message=message, severity="error")


def _warning(field: str, message: str) -> ValidationError:
    return ValidationError(field=field, message=message, severity="warning")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class TemplateValidator:
    """Validates template records: frontmatter schema plus required sections."""

    def __init__(self, known_ids: Iterable[str] | None = None) -> None:
        """Initialize validator.

        Args:
            known_ids: Identifiers of the loaded catalog. When given,
                ``combinableWith`` entries are checked against them.
        """
        self.known_ids = set(known_ids) if known_ids is not None else None

    def validate_metadata(
        self,
        metadata: dict[str, Any] | None,
        *,
        is_base: bool = False,
    ) -> list[ValidationError]:
        """Check frontmatter fields against the template schema."""
        if metadata is None:
            if is_base:
                return []
            return [_warning("frontmatter", "No frontmatter found")]

        errors: list[ValidationError] = []

        title = metadata.get("title")
        if _is_blank(title):
            errors.append(_error("title", "Missing required field: title"))
        elif not isinstance(title, str):
            errors.append(_error("title", 'Field "title" must be a string'))

        errors.extend(self._check_enum(metadata, "category", VALID_CATEGORIES))

        if "tags" not in metadata or metadata["tags"] is None:
            errors.append(_error("tags", "Missing required field: tags"))
        elif not isinstance(metadata["tags"], list):
            errors.append(_warning("tags", 'Field "tags" should be an array'))
        elif not metadata["tags"]:
            errors.append(_warning("tags", 'Field "tags" is empty'))

        errors.extend(self._check_enum(metadata, "difficulty", VALID_DIFFICULTIES))

        for name in LIST_FIELDS:
            if name in metadata and metadata[name] is not None and not isinstance(metadata[name], list):
                errors.append(_warning(name, f'Field "{name}" should be an array'))

        errors.extend(self._check_optional_fields(metadata))
        return errors

    @staticmethod
    def _check_enum(metadata: dict[str, Any], name: str, allowed: tuple[str, ...]) -> list[ValidationError]:
        value = metadata.get(name)
        if _is_blank(value):
            return [_error(name, f"Missing required field: {name}")]
        if not isinstance(value, str) or value not in allowed:
            return [_error(name, f"Invalid {name}: {value}. Must be one of: {', '.join(allowed)}")]
        return []

    def _check_optional_fields(self, metadata: dict[str, Any]) -> list[ValidationError]:
        errors: list[ValidationError] = []

        version = metadata.get("version")
        if version is not None:
            try:
                Version(str(version))
            except InvalidVersion:
                errors.append(_warning("version", f"Invalid version: {version!r}"))

        last_updated = metadata.get("lastUpdated")
        if last_updated is not None and not (
            isinstance(last_updated, str) and _DATE_PATTERN.match(last_updated)
        ):
            errors.append(_warning("lastUpdated", 'Field "lastUpdated" should be a YYYY-MM-DD date'))

        apply_to = metadata.get("applyTo")
        if apply_to is not None and not isinstance(apply_to, str):
            errors.append(_warning("applyTo", 'Field "applyTo" should be a glob string'))

        min_versions = metadata.get("minVersions")
        if min_versions is not None and not isinstance(min_versions, dict):
            errors.append(_warning("minVersions", 'Field "minVersions" should be a mapping'))

        deprecated = metadata.get("deprecated")
        if deprecated is not None and not isinstance(deprecated, bool):
            errors.append(_warning("deprecated", 'Field "deprecated" should be a boolean'))
        elif deprecated is True:
            reason = metadata.get("deprecationMessage")
            detail = f": {reason}" if isinstance(reason, str) and reason.strip() else ""
            errors.append(_warning("deprecated", f"Template is deprecated{detail}"))

        combinable = metadata.get("combinableWith")
        if self.known_ids is not None and isinstance(combinable, list):
            unknown = sorted(str(c) for c in combinable if str(c) not in self.known_ids)
            if unknown:
                errors.append(
                    _warning("combinableWith", f"Unknown templates in combinableWith: {', '.join(unknown)}")
                )
        return errors

    def validate_structure(self, text: str) -> list[ValidationError]:
        """Report each required section heading missing from ``text``."""
        report = check_structure(text)
        return [
            _error("structure", f"Missing required section: {section_heading(name)}")
            for name in report.missing
        ]

    def validate(self, record: TemplateRecord, strict: bool = False) -> ValidationResult:
        """Validate a record. In strict mode warnings are promoted to errors."""
        issues = [_warning("frontmatter", w) for w in record.parse_warnings]
        issues.extend(self.validate_metadata(record.metadata, is_base=record.is_base))
        issues.extend(self.validate_structure(record.raw_text))
        if strict:
            issues = [
                ValidationError(field=i.field, message=i.message, severity="error") for i in issues
            ]
        result = ValidationResult(
            path=record.path,
            identifier=record.identifier,
            issues=issues,
            strict=strict,
        )
        logger.debug("Validated %s: %s", record.path, result.classification.value)
        return result


def summarize(results: Iterable[ValidationResult]) -> ValidationSummary:
    """Count results by classification."""
    total = valid = invalid = with_warnings = 0
    for result in results:
        total += 1
        classification = result.classification
        if classification is Classification.INVALID:
            invalid += 1
        else:
            valid += 1
        if result.warnings:
            with_warnings += 1
    return ValidationSummary(total=total, valid=valid, invalid=invalid, with_warnings=with_warnings)
