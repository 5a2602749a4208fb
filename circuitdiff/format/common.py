"""Formatting rules shared by the shell and Markdown renderers."""

from __future__ import annotations

import math
from typing import Sequence

from circuitdiff.core.diff import ContractDiffReport, DiffProgram

#: Default quantile: the summary shows the 20% most significant changes.
DEFAULT_SUMMARY_QUANTILE: float = 0.8

INFINITY_SYMBOL = "∞"


def plus_sign(num: float) -> str:
    return "+" if num > 0 else ""


def format_number(value: float) -> str:
    """Format *value* with comma thousands grouping, independent of the host locale.

    Integral values print without decimals, other values with at most three
    fraction digits.
    """
    if isinstance(value, int) or float(value).is_integer():
        return f"{int(value):,}"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_percentage(percentage: float) -> str:
    """``+12.50%``, ``-3.00%``, ``0.00%`` or ``+∞%``."""
    text = INFINITY_SYMBOL if math.isinf(percentage) else f"{percentage:.2f}"
    return plus_sign(percentage) + text + "%"


def validate_quantile(summary_quantile: float) -> float:
    if not 0 <= summary_quantile <= 1:
        raise ValueError(f"summary_quantile must be within [0, 1], got {summary_quantile!r}")
    return summary_quantile


def summary_title_percentage(summary_quantile: float) -> int:
    """Share of the diffs shown in the summary, rounded half up."""
    return math.floor((1 - summary_quantile) * 100 + 0.5)


def summary_threshold(diffs: Sequence[DiffProgram], summary_quantile: float) -> float:
    """Absolute circuit-size percentage at *summary_quantile* of *diffs*.

    Returns ``0`` for an empty list.
    """
    validate_quantile(summary_quantile)
    if not diffs:
        return 0.0
    ranked = sorted(diffs, key=lambda d: abs(d.circuit_size.percentage))
    index = math.floor((len(ranked) - 1) * summary_quantile)
    return abs(ranked[index].circuit_size.percentage)


def select_summary_diffs(diffs: Sequence[DiffProgram], threshold: float) -> list[DiffProgram]:
    """Keep the changed diffs whose absolute circuit-size percentage reaches *threshold*.

    The input order is preserved.
    """
    return [
        diff
        for diff in diffs
        if abs(diff.circuit_size.percentage) >= threshold
        and (diff.acir_opcodes.delta != 0 or diff.circuit_size.delta != 0)
    ]


def flatten_contract_diffs(contract_diffs: Sequence[ContractDiffReport]) -> list[DiffProgram]:
    """Turn contract function diffs into ``contract::function`` rows."""
    rows: list[DiffProgram] = []
    for contract in contract_diffs:
        for func in contract.functions:
            rows.append(
                DiffProgram(
                    name=f"{contract.name}::{func.name}",
                    acir_opcodes=func.acir_opcodes,
                    circuit_size=func.circuit_size,
                )
            )
    return rows
