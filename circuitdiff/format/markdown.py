"""Markdown diff report, suitable for a pull-request comment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

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

NO_CHANGES_MESSAGE = "There are no changes in circuit sizes"

#: Joins stacked values inside one table cell.
CELL_BREAK = "<br />"


class TextAlign(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


_ALIGN_PATTERNS: dict[TextAlign, str] = {
    TextAlign.LEFT: ":-",
    TextAlign.RIGHT: "-:",
    TextAlign.CENTER: ":-:",
}


def align_pattern(align: TextAlign = TextAlign.LEFT) -> str:
    return _ALIGN_PATTERNS[align]


@dataclass(frozen=True)
class MarkdownColumn:
    txt: str
    align: TextAlign = TextAlign.LEFT


MARKDOWN_COLS: tuple[MarkdownColumn, ...] = (
    MarkdownColumn(""),
    MarkdownColumn("Program", TextAlign.LEFT),
    MarkdownColumn("ACIR opcodes (+/-)", TextAlign.RIGHT),
    MarkdownColumn("%", TextAlign.RIGHT),
    MarkdownColumn("Circuit size (+/-)", TextAlign.RIGHT),
    MarkdownColumn("%", TextAlign.RIGHT),
    MarkdownColumn(""),
)


def _change_emoji(delta: float) -> str:
    if delta > 0:
        return "❌"
    if delta < 0:
        return "✅"
    return "➖"


def _percentage_cell(rows: Sequence[Variation]) -> str:
    return CELL_BREAK.join(f"**{format_percentage(row.percentage)}**" for row in rows)


def format_markdown_summary_cell(rows: Sequence[Variation]) -> list[str]:
    """``[delta with emoji, percentage]`` for the summary table."""
    return [
        CELL_BREAK.join(
            plus_sign(row.delta) + format_number(row.delta) + " " + _change_emoji(row.delta)
            for row in rows
        ),
        _percentage_cell(rows),
    ]


def format_markdown_full_cell(rows: Sequence[Variation]) -> list[str]:
    """``[value (delta), percentage]`` for the full table."""
    return [
        CELL_BREAK.join(
            format_number(row.current) + "&nbsp;(" + plus_sign(row.delta) + format_number(row.delta) + ")"
            for row in rows
        ),
        _percentage_cell(rows),
    ]


def _table_header(columns: Sequence[MarkdownColumn]) -> list[str]:
    header = " | ".join(c.txt for c in columns).strip()
    separator = "|".join(align_pattern(c.align) if c.txt else "" for c in columns).strip()
    return [header, separator]


def _row(diff: DiffProgram, cell_formatter: Callable[[Sequence[Variation]], list[str]]) -> str:
    return " | ".join(
        [
            "",
            f"**{diff.name}**",
            *cell_formatter([diff.acir_opcodes]),
            *cell_formatter([diff.circuit_size]),
            "",
        ]
    ).strip()


def format_markdown_diff(
    header: str,
    diffs: Sequence[DiffProgram],
    repository: str,
    commit_hash: str,
    ref_commit_hash: str | None = None,
    summary_quantile: float = DEFAULT_SUMMARY_QUANTILE,
) -> str:
    """Render *diffs* as a Markdown report.

    Parameters:
        header: First line of the report (usually a Markdown heading).
        diffs: Program diffs, in display order.
        repository: ``owner/name`` slug used to build commit links.
        commit_hash: Commit the compared report was generated at.
        ref_commit_hash: Optional baseline commit.
        summary_quantile: Quantile of the absolute circuit-size percentage
            from which a diff enters the summary.

    Returns:
        Markdown text.  An empty *diffs* list yields a short "no changes" report.
    """
    attribution = f"> Generated at commit: [{commit_hash}](/{repository}/commit/{commit_hash})"
    if ref_commit_hash:
        attribution += f", compared to commit: [{ref_commit_hash}](/{repository}/commit/{ref_commit_hash})"
    report = [header, "", attribution]

    if not diffs:
        return "\n".join(report + ["", f"### {NO_CHANGES_MESSAGE}"]).strip()

    threshold = summary_threshold(diffs, summary_quantile)
    summary = select_summary_diffs(diffs, threshold)

    report.extend(
        [
            "",
            f"### 🧾 Summary ({summary_title_percentage(summary_quantile)}% most significant diffs)",
            "",
            *_table_header(MARKDOWN_COLS),
            *(_row(diff, format_markdown_summary_cell) for diff in summary),
            "---",
            "",
            "<details>",
            "<summary><strong>Full diff report</strong> 👇</summary>",
            "<br />",
            "",
            *_table_header(MARKDOWN_COLS),
            "\n".join(_row(diff, format_markdown_full_cell) for diff in diffs),
            "</details>",
            "",
        ]
    )
    return "\n".join(report).strip()
