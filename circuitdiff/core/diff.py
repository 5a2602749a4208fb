"""Diff engine — match two workspace reports by name and compute variations.

Entities are matched on exact name equality.  Names that appear in only one
snapshot are ignored, and when a name occurs more than once within a snapshot
the first occurrence wins.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Sequence

from circuitdiff.core.report import (
    CircuitReport,
    ContractReport,
    ProgramReport,
    WorkspaceReport,
)
from circuitdiff.errors import EmptyReportError

logger = logging.getLogger("circuitdiff.diff")


# ======================================================================
# Diff types
# ======================================================================

@dataclass(frozen=True)
class Variation:
    """Previous/current pair of one metric plus its absolute and relative change.

    Attributes:
        previous: Value in the baseline snapshot.
        current: Value in the compared snapshot.
        delta: ``current - previous``.
        percentage: ``100 * delta / previous``, or ``math.inf`` when
            *previous* is zero.
    """

    previous: float
    current: float
    delta: float
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "previous": self.previous,
            "current": self.current,
            "delta": self.delta,
            "percentage": "Infinity" if math.isinf(self.percentage) else self.percentage,
        }


@dataclass(frozen=True)
class DiffProgram:
    """Change of one program (or one contract function)."""

    name: str
    acir_opcodes: Variation
    circuit_size: Variation

    @property
    def is_empty(self) -> bool:
        return self.acir_opcodes.delta == 0 and self.circuit_size.delta == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "acir_opcodes": self.acir_opcodes.to_dict(),
            "circuit_size": self.circuit_size.to_dict(),
        }


@dataclass(frozen=True)
class ContractDiffReport:
    """Function-level changes within one contract."""

    name: str
    functions: tuple[DiffProgram, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "functions": [f.to_dict() for f in self.functions],
        }


@dataclass(frozen=True)
class WorkspaceDiffReport:
    programs: tuple[DiffProgram, ...] = ()
    contracts: tuple[ContractDiffReport, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.programs and not self.contracts

    def to_dict(self) -> dict[str, Any]:
        return {
            "programs": [p.to_dict() for p in self.programs],
            "contracts": [c.to_dict() for c in self.contracts],
        }


# ======================================================================
# Engine
# ======================================================================

def variation(current: float, previous: float) -> Variation:
    """Compute the change from *previous* to *current*.

    A zero *previous* value yields an infinite percentage, whatever the sign
    of the delta (including a zero delta).
    """
    delta = current - previous
    return Variation(
        previous=previous,
        current=current,
        delta=delta,
        percentage=(100 * delta) / previous if previous != 0 else math.inf,
    )


def compute_workspace_diff(
    source_report: WorkspaceReport,
    compare_report: WorkspaceReport,
) -> WorkspaceDiffReport:
    """Diff the programs and the contracts of two workspace snapshots.

    Parameters:
        source_report: Baseline snapshot ("previous" values).
        compare_report: Snapshot to compare against the baseline ("current" values).
    """
    return WorkspaceDiffReport(
        programs=tuple(compute_program_diffs(source_report.programs, compare_report.programs)),
        contracts=tuple(compute_contract_diffs(source_report.contracts, compare_report.contracts)),
    )


def compute_program_diffs(
    source_reports: Sequence[ProgramReport],
    compare_reports: Sequence[ProgramReport],
) -> list[DiffProgram]:
    """Diff the ``main`` circuit of every program present in both snapshots.

    Programs without any change are dropped.  The result is sorted by signed
    circuit-size percentage, largest increase first.
    A name repeated on either side is diffed once, using its first occurrence.

    Raises:
        EmptyReportError: If a matched program has no functions.
    """
    sources = _first_by_name(source_reports, lambda r: r.package_name, "program")
    compares = _first_by_name(compare_reports, lambda r: r.package_name, "program")

    diffs: list[DiffProgram] = []
    for name in compares:
        if name not in sources:
            logger.debug("program %s only in compare report, ignored", name)
            continue
        # For now only the main function of each program is compared
        diff = _circuit_diff(
            _main_function(sources[name], name),
            _main_function(compares[name], name),
            name,
        )
        if diff.is_empty:
            continue
        diffs.append(diff)

    for name in sources:
        if name not in compares:
            logger.debug("program %s only in source report, ignored", name)

    return sorted(diffs, key=lambda d: d.circuit_size.percentage, reverse=True)


def compute_contract_diffs(
    source_reports: Sequence[ContractReport],
    compare_reports: Sequence[ContractReport],
) -> list[ContractDiffReport]:
    """Diff the functions of every contract present in both snapshots.

    Contracts without any function change are dropped.  The result is sorted
    by the largest absolute circuit-size percentage among each contract's
    functions.
    """
    sources = _first_by_name(source_reports, lambda r: r.name, "contract")
    compares = _first_by_name(compare_reports, lambda r: r.name, "contract")

    diffs: list[ContractDiffReport] = []
    for name in compares:
        if name not in sources:
            logger.debug("contract %s only in compare report, ignored", name)
            continue
        diff = _contract_diff(sources[name], compares[name])
        if not diff.functions:
            continue
        diffs.append(diff)

    return sorted(
        diffs,
        key=lambda d: max(abs(f.circuit_size.percentage) for f in d.functions),
        reverse=True,
    )


# ======================================================================
# Helpers
# ======================================================================

def _first_by_name(reports: Sequence[Any], key: Any, kind: str) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for report in reports:
        name = key(report)
        if name in out:
            logger.warning("duplicate %s name %r, keeping the first occurrence", kind, name)
            continue
        out[name] = report
    return out


def _main_function(report: ProgramReport, name: str) -> CircuitReport:
    if not report.functions:
        raise EmptyReportError(f"Program {name!r} has no compiled functions")
    return report.functions[0]


def _circuit_diff(
    source: CircuitReport,
    compare: CircuitReport,
    report_name: str,
) -> DiffProgram:
    # Named after the package, which stands for the whole program
    return DiffProgram(
        name=report_name,
        acir_opcodes=variation(compare.acir_opcodes, source.acir_opcodes),
        circuit_size=variation(compare.circuit_size, source.circuit_size),
    )


def _as_programs(contract: ContractReport) -> list[ProgramReport]:
    # Contract functions are assumed not to make non-inlined ACIR calls,
    # so each one is diffed as a single-function program.
    return [ProgramReport(package_name=f.name, functions=(f,)) for f in contract.functions]


def _contract_diff(source: ContractReport, compare: ContractReport) -> ContractDiffReport:
    function_diffs = compute_program_diffs(_as_programs(source), _as_programs(compare))
    logger.debug("contract %s: %d changed functions", source.name, len(function_diffs))
    return ContractDiffReport(name=source.name, functions=tuple(function_diffs))
