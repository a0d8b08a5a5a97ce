from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when configuration is missing or invalid."""


class ExportError(RuntimeError):
    """Raised when writing the markdown or workbook export fails."""
