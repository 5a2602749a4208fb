"""circuitdiff — diff reports for circuit compilation metrics."""

from __future__ import annotations

__version__ = "0.1.0"

from circuitdiff.api import compare_workspaces, diff_reports, load_workspace
from circuitdiff.core.diff import (
    compute_contract_diffs,
    compute_program_diffs,
    compute_workspace_diff,
    variation,
)
from circuitdiff.format.markdown import format_markdown_diff
from circuitdiff.format.shell import format_shell_diff

__all__ = [
    "__version__",
    "variation",
    "compute_program_diffs",
    "compute_contract_diffs",
    "compute_workspace_diff",
    "format_shell_diff",
    "format_markdown_diff",
    "load_workspace",
    "compare_workspaces",
    "diff_reports",
]
