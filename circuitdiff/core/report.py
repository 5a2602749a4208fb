"""Workspace report data model.

A workspace report is the JSON document emitted by the circuit compiler's
``info`` command for every package of a workspace.  It lists the ACIR opcode
count and the circuit size of each compiled function, grouped by program
(binary packages) and by contract.

All types are frozen; sequences are stored as tuples.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from circuitdiff.errors import ReportLoadError, ReportValidationError


@dataclass(frozen=True)
class CircuitReport:
    """Metrics of one compiled function."""

    name: str
    acir_opcodes: int
    circuit_size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "acir_opcodes": self.acir_opcodes,
            "circuit_size": self.circuit_size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CircuitReport:
        return cls(
            name=data["name"],
            acir_opcodes=data["acir_opcodes"],
            circuit_size=data["circuit_size"],
        )


@dataclass(frozen=True)
class ProgramReport:
    """A program package.  Only ``functions[0]`` (``main``) is diffed."""

    package_name: str
    functions: tuple[CircuitReport, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "package_name": self.package_name,
            "functions": [f.to_dict() for f in self.functions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgramReport:
        return cls(
            package_name=data["package_name"],
            functions=tuple(CircuitReport.from_dict(f) for f in data.get("functions", [])),
        )


@dataclass(frozen=True)
class ContractReport:
    """A contract package with one circuit per contract function."""

    name: str
    functions: tuple[CircuitReport, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "functions": [f.to_dict() for f in self.functions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContractReport:
        return cls(
            name=data["name"],
            functions=tuple(CircuitReport.from_dict(f) for f in data.get("functions", [])),
        )


@dataclass(frozen=True)
class WorkspaceReport:
    """Snapshot of every program and contract in a workspace.

    Attributes:
        programs: Program packages, in the order the compiler reported them.
        contracts: Contract packages, in the order the compiler reported them.
    """

    programs: tuple[ProgramReport, ...] = field(default_factory=tuple)
    contracts: tuple[ContractReport, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "programs": [p.to_dict() for p in self.programs],
            "contracts": [c.to_dict() for c in self.contracts],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkspaceReport:
        return cls(
            programs=tuple(ProgramReport.from_dict(p) for p in data.get("programs", [])),
            contracts=tuple(ContractReport.from_dict(c) for c in data.get("contracts", [])),
        )


def load_reports(content: str, *, validate: bool = True) -> WorkspaceReport:
    """Parse a workspace report from JSON text.

    Parameters:
        content: JSON document.
        validate: Check the document against ``WORKSPACE_REPORT_SCHEMA`` first.

    Raises:
        ReportLoadError: If *content* is not valid JSON.
        ReportValidationError: If the document does not match the schema.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ReportLoadError(f"Invalid JSON report: {exc}") from exc

    if validate:
        from circuitdiff.core.schemas import validate_report

        validate_report(data)
    return WorkspaceReport.from_dict(data)


def load_reports_file(path: str | Path, *, validate: bool = True) -> WorkspaceReport:
    """Read and parse a workspace report file."""
    p = Path(path)
    try:
        content = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReportLoadError(f"Cannot read report {p}: {exc}") from exc
    try:
        return load_reports(content, validate=validate)
    except ReportLoadError as exc:
        raise ReportLoadError(f"{p}: {exc}") from exc
    except ReportValidationError as exc:
        raise ReportValidationError(f"{p}: {exc}", errors=exc.errors) from exc
