"""Template catalog — discovers, loads and filters instruction templates."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from copilot_templates.templates.exceptions import TemplateLoadError, TemplateNotFoundError
from copilot_templates.templates.frontmatter import parse_frontmatter
from copilot_templates.templates.models import CatalogLoadResult, LoadError, TemplateRecord

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = "templates"
DEFAULT_PATTERN = "**/*.md"
BASE_TEMPLATE_NAME = "_base-template.md"
UNKNOWN_CATEGORY = "unknown"

# Directory names never searched for templates.
_IGNORED_DIRS = frozenset({"node_modules", "dist"})


class TemplateCatalog:
    """Catalog of instruction templates found under a directory tree."""

    def __init__(
        self,
        templates_dir: Path | str = DEFAULT_TEMPLATES_DIR,
        pattern: str = DEFAULT_PATTERN,
        base_template: str = BASE_TEMPLATE_NAME,
        include_base: bool = False,
    ) -> None:
        """Initialize the catalog.

        Args:
            templates_dir: Root directory to search. Relative paths resolve
                against the current working directory.
            pattern: Glob pattern, relative to ``templates_dir``.
            base_template: Filename of the skeleton template for authors.
            include_base: Keep the skeleton template in discovery results.
        """
        self.templates_dir = Path(templates_dir)
        self.pattern = pattern
        self.base_template = base_template
        self.include_base = include_base
        self.warnings: list[str] = []
        self._records: dict[str, TemplateRecord] = {}

    def is_base(self, path: Path) -> bool:
        return path.name == self.base_template

    def discover(self) -> list[Path]:
        """Return template paths matching the pattern, sorted for a stable order."""
        if not self.templates_dir.exists() or not self.templates_dir.is_dir():
            logger.warning("Templates directory does not exist: %s", self.templates_dir)
            message = f"Templates directory does not exist: {self.templates_dir}"
            if message not in self.warnings:
                self.warnings.append(message)
            return []

        paths: list[Path] = []
        for path in sorted(self.templates_dir.glob(self.pattern)):
            if not path.is_file():
                continue
            relative_parts = path.relative_to(self.templates_dir).parts[:-1]
            if any(part in _IGNORED_DIRS for part in relative_parts):
                continue
            if self.is_base(path) and not self.include_base:
                logger.debug("Skipping base template: %s", path)
                continue
            paths.append(path)
        return paths

    def load_file(self, path: Path | str) -> TemplateRecord:
        """Read one template file and build its record.

        Raises:
            TemplateLoadError: The file cannot be read or is not UTF-8 text.
        """
        file_path = Path(path)
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateLoadError(f"Cannot read file: {e}", path=file_path) from e

        parsed = parse_frontmatter(content)
        identifier = file_path.name.removesuffix(".md")
        return TemplateRecord(
            path=file_path,
            identifier=identifier,
            metadata=parsed.data,
            raw_text=content,
            parse_warnings=parsed.warnings,
            is_base=self.is_base(file_path),
        )

    def load(self) -> CatalogLoadResult:
        """Discover and load every template; unreadable files are reported, not raised."""
        self._records = {}
        result = CatalogLoadResult()
        for path in self.discover():
            try:
                record = self.load_file(path)
            except TemplateLoadError as e:
                logger.warning("Failed to load template %s: %s", path, e)
                result.load_errors.append(LoadError(path=path, message=str(e)))
                continue
            except Exception as e:
                logger.warning("Failed to parse template %s: %s", path, e, exc_info=False)
                result.load_errors.append(LoadError(path=path, message=f"Cannot parse file: {e}"))
                continue
            if record.identifier in self._records:
                logger.warning(
                    "Duplicate template id '%s' in %s (already loaded from %s)",
                    record.identifier,
                    path,
                    self._records[record.identifier].path,
                )
            else:
                self._records[record.identifier] = record
            result.records.append(record)
        result.warnings.extend(self.warnings)
        if result.records:
            logger.info("Loaded %d templates from %s", len(result.records), self.templates_dir)
        return result

    def get(self, identifier: str) -> TemplateRecord | None:
        """Get a record from the last load by identifier. Returns None if not found."""
        return self._records.get(identifier)

    def get_or_raise(self, identifier: str) -> TemplateRecord:
        """Get a record by identifier. Raises TemplateNotFoundError if not found."""
        record = self._records.get(identifier)
        if record is None:
            raise TemplateNotFoundError(f"Template not found: {identifier}", identifier=identifier)
        return record

    def identifiers(self) -> set[str]:
        return set(self._records)


def filter_records(
    records: Iterable[TemplateRecord],
    category: str | None = None,
    tag: str | None = None,
    difficulty: str | None = None,
) -> list[TemplateRecord]:
    """Return records matching every supplied criterion, in input order.

    Records without frontmatter never match once any criterion is given.
    """
    if not (category or tag or difficulty):
        return list(records)
    filtered: list[TemplateRecord] = []
    for record in records:
        if record.metadata is None:
            continue
        if category and record.category != category:
            continue
        if tag and tag not in record.tags:
            continue
        if difficulty and record.difficulty != difficulty:
            continue
        filtered.append(record)
    return filtered


def group_by_category(records: Iterable[TemplateRecord]) -> dict[str, list[TemplateRecord]]:
    """Group records by category, sorted by category then display name."""
    grouped: dict[str, list[TemplateRecord]] = {}
    for record in records:
        grouped.setdefault(record.category or UNKNOWN_CATEGORY, []).append(record)
    return {
        category: sorted(grouped[category], key=lambda r: (r.display_name.lower(), r.identifier))
        for category in sorted(grouped)
    }
