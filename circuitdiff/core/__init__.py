"""Core subpackage — report model, schema validation, diff engine."""

from __future__ import annotations

__all__ = [
    "CircuitReport",
    "ContractDiffReport",
    "ContractReport",
    "DiffProgram",
    "ProgramReport",
    "Variation",
    "WorkspaceDiffReport",
    "WorkspaceReport",
    "compute_contract_diffs",
    "compute_program_diffs",
    "compute_workspace_diff",
    "load_reports",
    "load_reports_file",
    "validate_report",
    "variation",
]

from circuitdiff.core.diff import (
    ContractDiffReport,
    DiffProgram,
    Variation,
    WorkspaceDiffReport,
    compute_contract_diffs,
    compute_program_diffs,
    compute_workspace_diff,
    variation,
)
from circuitdiff.core.report import (
    CircuitReport,
    ContractReport,
    ProgramReport,
    WorkspaceReport,
    load_reports,
    load_reports_file,
)
from circuitdiff.core.schemas import validate_report
