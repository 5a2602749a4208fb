"""JSON Schema for workspace report documents.

The schema is a Python dict following JSON Schema Draft 2020-12.
``validate_report`` checks a parsed document against it.
"""

from __future__ import annotations

from typing import Any

import jsonschema

from circuitdiff.errors import ReportValidationError

# ======================================================================
# Schemas
# ======================================================================

CIRCUIT_REPORT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["name", "acir_opcodes", "circuit_size"],
    "properties": {
        "name": {"type": "string"},
        "acir_opcodes": {"type": "integer", "minimum": 0},
        "circuit_size": {"type": "integer", "minimum": 0},
    },
    "additionalProperties": True,
}

WORKSPACE_REPORT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Workspace Circuit Report",
    "type": "object",
    "properties": {
        "programs": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["package_name", "functions"],
                "properties": {
                    "package_name": {"type": "string"},
                    "functions": {"type": "array", "items": CIRCUIT_REPORT_SCHEMA},
                },
                "additionalProperties": True,
            },
        },
        "contracts": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "functions"],
                "properties": {
                    "name": {"type": "string"},
                    "functions": {"type": "array", "items": CIRCUIT_REPORT_SCHEMA},
                },
                "additionalProperties": True,
            },
        },
    },
    "additionalProperties": True,
}

#: Maximum number of schema errors quoted in an exception message.
MAX_REPORTED_ERRORS = 5


def report_errors(data: Any) -> list[str]:
    """Return ``[path] message`` strings for every schema violation (empty = valid)."""
    validator = jsonschema.Draft202012Validator(WORKSPACE_REPORT_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))

    msgs: list[str] = []
    for err in errors:
        path = ".".join(str(p) for p in err.absolute_path) or "(root)"
        msgs.append(f"[{path}] {err.message}")
    return msgs


def validate_report(data: Any) -> None:
    """Validate a parsed workspace report document.

    Raises:
        ReportValidationError: Listing up to ``MAX_REPORTED_ERRORS`` violations.
    """
    msgs = report_errors(data)
    if msgs:
        summary = "\n".join(f"  {m}" for m in msgs[:MAX_REPORTED_ERRORS])
        raise ReportValidationError(f"Invalid workspace report:\n{summary}", errors=msgs)
