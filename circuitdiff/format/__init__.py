"""Format subpackage — terminal and Markdown diff reports."""

from __future__ import annotations

__all__ = [
    "AnsiColorizer",
    "Colorizer",
    "PlainColorizer",
    "format_markdown_diff",
    "format_shell_diff",
    "select_summary_diffs",
    "summary_threshold",
]

from circuitdiff.format.common import select_summary_diffs, summary_threshold
from circuitdiff.format.markdown import format_markdown_diff
from circuitdiff.format.shell import AnsiColorizer, Colorizer, PlainColorizer, format_shell_diff
