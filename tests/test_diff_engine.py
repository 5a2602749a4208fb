"""Tests for the diff engine."""

from __future__ import annotations

import logging
import math

import pytest

from circuitdiff.core.diff import (
    ContractDiffReport,
    DiffProgram,
    Variation,
    compute_contract_diffs,
    compute_program_diffs,
    compute_workspace_diff,
    variation,
)
from circuitdiff.core.report import CircuitReport, ContractReport, ProgramReport, WorkspaceReport
from circuitdiff.errors import EmptyReportError


def _program(name: str, acir: int, size: int) -> ProgramReport:
    return ProgramReport(package_name=name, functions=(CircuitReport("main", acir, size),))


def _contract(name: str, *functions: tuple[str, int, int]) -> ContractReport:
    return ContractReport(name=name, functions=tuple(CircuitReport(*f) for f in functions))


# ======================================================================
# variation
# ======================================================================

class TestVariation:

    @pytest.mark.parametrize(
        ("previous", "current"),
        [(100, 150), (200, 180), (3, 4), (7, 7), (-10, 5)],
    )
    def test_percentage_formula(self, previous, current):
        v = variation(current, previous)
        assert v.delta == current - previous
        assert v.percentage == pytest.approx(100 * (current - previous) / previous)

    def test_zero_previous_is_infinite(self):
        assert variation(5, 0) == Variation(previous=0, current=5, delta=5, percentage=math.inf)

    def test_zero_previous_decrease_is_positive_infinity(self):
        v = variation(-3, 0)
        assert v.delta == -3
        assert v.percentage == math.inf

    def test_both_zero(self):
        v = variation(0, 0)
        assert v.delta == 0
        assert v.percentage == math.inf

    def test_frozen(self):
        v = variation(2, 1)
        with pytest.raises(AttributeError):
            v.delta = 3  # type: ignore[misc]

    def test_to_dict_encodes_infinity(self):
        assert variation(1, 0).to_dict()["percentage"] == "Infinity"
        assert variation(150, 100).to_dict() == {
            "previous": 100,
            "current": 150,
            "delta": 50,
            "percentage": 50.0,
        }


# ======================================================================
# Programs
# ======================================================================

class TestProgramDiffs:

    def test_end_to_end_scenario(self):
        diffs = compute_program_diffs([_program("a", 100, 200)], [_program("a", 150, 180)])
        assert diffs == [
            DiffProgram(
                name="a",
                acir_opcodes=Variation(previous=100, current=150, delta=50, percentage=50.0),
                circuit_size=Variation(previous=200, current=180, delta=-20, percentage=-10.0),
            )
        ]

    def test_self_diff_is_empty(self):
        reports = [_program("a", 1, 2), _program("b", 30, 40), _program("c", 0, 0)]
        assert compute_program_diffs(reports, reports) == []

    def test_unmatched_names_are_ignored(self):
        source = [_program("only_source", 1, 1), _program("shared", 10, 10)]
        compare = [_program("shared", 20, 20), _program("only_compare", 5, 5)]
        diffs = compute_program_diffs(source, compare)
        assert [d.name for d in diffs] == ["shared"]

    def test_only_main_function_is_compared(self):
        source = [ProgramReport("p", (CircuitReport("main", 10, 10), CircuitReport("helper", 1, 1)))]
        compare = [ProgramReport("p", (CircuitReport("main", 10, 10), CircuitReport("helper", 99, 99)))]
        assert compute_program_diffs(source, compare) == []

    def test_change_in_one_metric_is_kept(self):
        diffs = compute_program_diffs([_program("a", 10, 100)], [_program("a", 11, 100)])
        assert len(diffs) == 1
        assert diffs[0].circuit_size.delta == 0

    def test_sorted_by_signed_circuit_size_percentage(self):
        source = [_program(n, 100, 100) for n in ("small", "drop", "big", "new")]
        compare = [
            _program("drop", 100, 10),   # -90%
            _program("small", 100, 105),  # +5%
            _program("big", 100, 150),    # +50%
            _program("new", 100, 101),    # +1%
        ]
        diffs = compute_program_diffs(source, compare)
        assert [d.name for d in diffs] == ["big", "small", "new", "drop"]
        for a, b in zip(diffs, diffs[1:]):
            assert a.circuit_size.percentage >= b.circuit_size.percentage

    def test_infinite_percentage_sorts_first(self):
        source = [_program("a", 1, 100), _program("b", 1, 0)]
        compare = [_program("a", 1, 300), _program("b", 1, 7)]
        assert [d.name for d in compute_program_diffs(source, compare)] == ["b", "a"]

    def test_ties_keep_compare_order(self):
        source = [_program("x", 10, 10), _program("y", 10, 10)]
        compare = [_program("y", 20, 20), _program("x", 20, 20)]
        assert [d.name for d in compute_program_diffs(source, compare)] == ["y", "x"]

    def test_duplicate_names_first_wins(self, caplog):
        source = [_program("a", 10, 10), _program("a", 999, 999)]
        compare = [_program("a", 20, 20), _program("a", 0, 0)]
        with caplog.at_level(logging.WARNING, logger="circuitdiff.diff"):
            diffs = compute_program_diffs(source, compare)
        assert len(diffs) == 1
        assert diffs[0].acir_opcodes == variation(20, 10)
        assert "duplicate program name" in caplog.text

    def test_repeated_compare_entry_yields_one_row(self):
        source = [_program("a", 10, 10)]
        compare = [_program("a", 20, 20), _program("a", 20, 20)]
        diffs = compute_program_diffs(source, compare)
        assert [d.name for d in diffs] == ["a"]

    def test_empty_functions_fail_fast(self):
        source = [ProgramReport("a", ())]
        compare = [_program("a", 1, 1)]
        with pytest.raises(EmptyReportError, match="'a'"):
            compute_program_diffs(source, compare)

    def test_empty_functions_on_unmatched_program_is_ignored(self):
        source = [ProgramReport("lonely", ())]
        assert compute_program_diffs(source, [_program("other", 1, 1)]) == []


# ======================================================================
# Contracts
# ======================================================================

class TestContractDiffs:

    def test_function_level_diffs(self):
        source = [_contract("Token", ("transfer", 100, 1000), ("mint", 50, 500))]
        compare = [_contract("Token", ("transfer", 110, 1100), ("mint", 50, 500))]
        diffs = compute_contract_diffs(source, compare)
        assert len(diffs) == 1
        assert diffs[0].name == "Token"
        assert [f.name for f in diffs[0].functions] == ["transfer"]
        assert diffs[0].functions[0].circuit_size.percentage == pytest.approx(10.0)

    def test_unchanged_contract_is_dropped(self):
        contracts = [_contract("Same", ("f", 1, 2))]
        assert compute_contract_diffs(contracts, contracts) == []

    def test_unmatched_contracts_and_functions_are_ignored(self):
        source = [_contract("A", ("f", 10, 10), ("gone", 1, 1)), _contract("OnlySource", ("f", 1, 1))]
        compare = [_contract("A", ("f", 20, 20), ("added", 1, 1)), _contract("OnlyCompare", ("f", 1, 1))]
        diffs = compute_contract_diffs(source, compare)
        assert [c.name for c in diffs] == ["A"]
        assert [f.name for f in diffs[0].functions] == ["f"]

    def test_sorted_by_max_absolute_percentage(self):
        source = [
            _contract("Mild", ("f", 100, 100)),
            _contract("Shrunk", ("f", 100, 100), ("g", 100, 100)),
        ]
        compare = [
            _contract("Mild", ("f", 100, 120)),                      # +20%
            _contract("Shrunk", ("f", 100, 110), ("g", 100, 30)),    # +10%, -70%
        ]
        diffs = compute_contract_diffs(source, compare)
        assert [c.name for c in diffs] == ["Shrunk", "Mild"]
        # functions inside a contract keep the signed ordering
        assert [f.name for f in diffs[0].functions] == ["f", "g"]


def test_compute_workspace_diff():
    source = WorkspaceReport(
        programs=(_program("a", 100, 200), _program("b", 1, 1)),
        contracts=(_contract("C", ("f", 10, 10)),),
    )
    compare = WorkspaceReport(
        programs=(_program("a", 150, 180), _program("b", 1, 1)),
        contracts=(_contract("C", ("f", 10, 20)),),
    )
    diff = compute_workspace_diff(source, compare)
    assert [p.name for p in diff.programs] == ["a"]
    assert diff.contracts == (
        ContractDiffReport(name="C", functions=(DiffProgram("f", variation(10, 10), variation(20, 10)),)),
    )
    assert not diff.is_empty
    assert compute_workspace_diff(source, source).is_empty
    assert diff.to_dict()["contracts"][0]["functions"][0]["circuit_size"]["delta"] == 10
