"""Custom exceptions for the instruction template library."""

from __future__ import annotations

from pathlib import Path


class TemplateError(Exception):
    """Base exception for template library errors."""


class TemplateNotFoundError(TemplateError):
    """Raised when a template identifier is not found in the catalog."""

    def __init__(self, message: str, identifier: str | None = None) -> None:
        super().__init__(message)
        self.identifier = identifier


class TemplateLoadError(TemplateError):
    """Raised when a template file cannot be read."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
