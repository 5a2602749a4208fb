"""Plain-text (terminal) diff report.

Colours go through a ``Colorizer`` so the same layout is produced with ANSI
escapes for a terminal, or without them for files and logs.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Sequence

from rich.color import ColorSystem
from rich.style import Style

from circuitdiff.core.diff import DiffProgram, Variation
from circuitdiff.format.common import (
    DEFAULT_SUMMARY_QUANTILE,
    format_number,
    format_percentage,
    plus_sign,
    select_summary_diffs,
    summary_threshold,
    summary_title_percentage,
)

#: Width of the value and delta halves of a numeric cell.
CELL_WIDTH = 10
PERCENTAGE_WIDTH = 9
METRIC_COLUMN_WIDTH = 33
MIN_PROGRAM_WIDTH = 8


# ======================================================================
# Colour capability
# ======================================================================

class Colorizer(abc.ABC):
    """Applies named text styles (``"bold"``, ``"red"``, ...)."""

    @abc.abstractmethod
    def colorize(self, text: str, *styles: str) -> str:
        """Return *text* rendered with every style in *styles*."""


class AnsiColorizer(Colorizer):
    """Emit ANSI SGR escape sequences through ``rich``."""

    def __init__(self, color_system: ColorSystem = ColorSystem.STANDARD) -> None:
        self.color_system = color_system

    def colorize(self, text: str, *styles: str) -> str:
        if not styles:
            return text
        return Style.parse(" ".join(styles)).render(text, color_system=self.color_system)


class PlainColorizer(Colorizer):
    """No-op colorizer for non-terminal output."""

    def colorize(self, text: str, *styles: str) -> str:
        return text


# ======================================================================
# Layout
# ======================================================================

@dataclass(frozen=True)
class ShellColumn:
    txt: str
    length: int = 0


def _center(text: str, length: int) -> str:
    return text.rjust((len(text) + length) // 2).ljust(length)


def _delta_style(delta: float) -> tuple[str, ...]:
    if delta > 0:
        return ("red",)
    if delta < 0:
        return ("green",)
    return ()


def format_shell_cell(
    cell: Variation,
    colorizer: Colorizer,
    length: int = CELL_WIDTH,
) -> list[str]:
    """Render one metric as ``[value (delta), percentage]``."""
    style = _delta_style(cell.delta)
    delta_text = ("(" + plus_sign(cell.delta) + format_number(cell.delta) + ")").ljust(length)
    percentage_text = format_percentage(cell.percentage).rjust(PERCENTAGE_WIDTH)

    return [
        format_number(cell.current).rjust(length) + " " + colorizer.colorize(delta_text, *style),
        colorizer.colorize(percentage_text, "bold", *style),
    ]


def _columns(program_width: int) -> list[ShellColumn]:
    return [
        ShellColumn(""),
        ShellColumn("Program", program_width),
        ShellColumn("ACIR opcodes (+/-)", METRIC_COLUMN_WIDTH),
        ShellColumn("Circuit size (+/-)", METRIC_COLUMN_WIDTH),
        ShellColumn(""),
    ]


def _table(
    columns: list[ShellColumn],
    diffs: Sequence[DiffProgram],
    program_width: int,
    colorizer: Colorizer,
) -> str:
    header = " | ".join(colorizer.colorize(_center(c.txt, c.length), "bold") for c in columns).strip()
    separator = "|".join("-" * (c.length + 2) if c.length > 0 else "" for c in columns).strip()

    rows = [
        " | ".join(
            [
                "",
                colorizer.colorize(diff.name.ljust(program_width), "bold", "bright_black"),
                *format_shell_cell(diff.acir_opcodes, colorizer),
                *format_shell_cell(diff.circuit_size, colorizer),
                "",
            ]
        ).strip()
        for diff in diffs
    ]
    return f"\n{separator}\n".join(["", header, *rows, ""]).strip()


def format_shell_diff(
    diffs: Sequence[DiffProgram],
    summary_quantile: float = DEFAULT_SUMMARY_QUANTILE,
    colorizer: Colorizer | None = None,
) -> str:
    """Render *diffs* as a summary table followed by the full diff table.

    Parameters:
        diffs: Program diffs, in display order.
        summary_quantile: Quantile of the absolute circuit-size percentage
            from which a diff enters the summary.
        colorizer: Defaults to ``AnsiColorizer``.

    Returns:
        The report text.
    """
    colorizer = colorizer or AnsiColorizer()
    program_width = max([MIN_PROGRAM_WIDTH, *(len(d.name) for d in diffs)])
    columns = _columns(program_width)

    threshold = summary_threshold(diffs, summary_quantile)
    summary = select_summary_diffs(diffs, threshold)

    title_style = ("bold", "underline", "yellow")
    title = f"🧾 Summary ({summary_title_percentage(summary_quantile)}% most significant diffs)"

    return (
        colorizer.colorize(title, *title_style)
        + "\n\n"
        + _table(columns, summary, program_width, colorizer)
        + "\n\n"
        + colorizer.colorize("Full diff report 👇", *title_style)
        + "\n\n"
        + _table(columns, diffs, program_width, colorizer)
    )
