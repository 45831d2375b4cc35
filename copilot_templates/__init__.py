"""copilot-templates — list, validate and combine GitHub Copilot instruction templates."""

__version__ = "1.0.0"
