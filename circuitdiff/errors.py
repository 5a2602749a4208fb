"""Exception hierarchy for circuitdiff."""

from __future__ import annotations


class CircuitDiffError(Exception):
    """Base class for all circuitdiff errors."""


class ReportLoadError(CircuitDiffError):
    """Raised when a workspace report document cannot be read or parsed."""


class ReportValidationError(CircuitDiffError):
    """Raised when a workspace report document does not match the schema."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class EmptyReportError(CircuitDiffError, ValueError):
    """Raised when a matched program or contract function has no circuits."""


class ConfigError(CircuitDiffError):
    """Raised on an invalid ``[tool.circuitdiff]`` section."""
