"""circuitdiff public Python API.

Provides the primary entrypoints:
  - ``load_workspace(...)`` → WorkspaceReport
  - ``compare_workspaces(...)`` → WorkspaceDiffReport
  - ``diff_reports(...)`` → rendered report text
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from circuitdiff.config import DiffConfig
from circuitdiff.core.diff import DiffProgram, WorkspaceDiffReport, compute_workspace_diff
from circuitdiff.core.report import WorkspaceReport, load_reports, load_reports_file
from circuitdiff.core.schemas import validate_report
from circuitdiff.format.common import flatten_contract_diffs
from circuitdiff.format.markdown import format_markdown_diff
from circuitdiff.format.shell import AnsiColorizer, Colorizer, PlainColorizer, format_shell_diff

logger = logging.getLogger("circuitdiff")

OUTPUT_FORMATS = ("markdown", "shell", "json")

_REPORT_SUFFIXES: dict[str, str] = {
    "markdown": ".md",
    "shell": ".txt",
    "json": ".json",
}

WorkspaceSource = str | Path | dict[str, Any] | WorkspaceReport


def load_workspace(source: WorkspaceSource) -> WorkspaceReport:
    """Coerce *source* into a ``WorkspaceReport``.

    Parameters:
        source: A ``WorkspaceReport``, a parsed JSON dict, JSON text, or a
            path to a JSON report file.
    """
    if isinstance(source, WorkspaceReport):
        return source
    if isinstance(source, dict):
        validate_report(source)
        return WorkspaceReport.from_dict(source)
    if isinstance(source, str) and source.lstrip().startswith("{"):
        return load_reports(source)
    return load_reports_file(source)


def compare_workspaces(source: WorkspaceSource, compare: WorkspaceSource) -> WorkspaceDiffReport:
    """Diff *compare* against the baseline *source*."""
    source_report = load_workspace(source)
    compare_report = load_workspace(compare)
    diff = compute_workspace_diff(source_report, compare_report)
    logger.info(
        "Compared %d/%d programs and %d/%d contracts: %d program and %d contract changes",
        len(source_report.programs),
        len(compare_report.programs),
        len(source_report.contracts),
        len(compare_report.contracts),
        len(diff.programs),
        len(diff.contracts),
    )
    return diff


def workspace_rows(diff: WorkspaceDiffReport) -> list[DiffProgram]:
    """Program diffs followed by ``contract::function`` diffs, as table rows."""
    return [*diff.programs, *flatten_contract_diffs(diff.contracts)]


def render_diff(
    diff: WorkspaceDiffReport,
    output_format: str = "markdown",
    *,
    config: DiffConfig | None = None,
    commit_hash: str | None = None,
    ref_commit_hash: str | None = None,
    colorizer: Colorizer | None = None,
) -> str:
    """Render a computed workspace diff.

    Raises:
        ValueError: On an unknown *output_format*, or a Markdown report
            without *commit_hash*.
    """
    config = config or DiffConfig()

    if output_format == "json":
        return json.dumps(diff.to_dict(), indent=2)

    rows = workspace_rows(diff)

    if output_format == "shell":
        if colorizer is None:
            colorizer = AnsiColorizer() if config.color else PlainColorizer()
        return format_shell_diff(rows, config.summary_quantile, colorizer=colorizer)

    if output_format == "markdown":
        if not commit_hash:
            raise ValueError("A commit hash is required to render a Markdown report")
        return format_markdown_diff(
            config.header,
            rows,
            config.repository,
            commit_hash,
            ref_commit_hash,
            config.summary_quantile,
        )

    raise ValueError(f"Unknown output format {output_format!r}; expected one of {OUTPUT_FORMATS}")


def diff_reports(
    source: WorkspaceSource,
    compare: WorkspaceSource,
    output_format: str = "markdown",
    *,
    header: str | None = None,
    repository: str | None = None,
    commit_hash: str | None = None,
    ref_commit_hash: str | None = None,
    summary_quantile: float | None = None,
    colorizer: Colorizer | None = None,
    config: DiffConfig | None = None,
    report_dir: str | Path | None = None,
) -> str:
    """Compare two workspace reports and render the diff.

    Parameters:
        source: Baseline report (path, JSON text, dict, or ``WorkspaceReport``).
        compare: Report to compare against the baseline.
        output_format: ``"markdown"``, ``"shell"`` or ``"json"``.
        header: Markdown report header (overrides *config*).
        repository: Repository slug for commit links (overrides *config*).
        commit_hash: Commit of the *compare* report (required for Markdown).
        ref_commit_hash: Commit of the *source* report.
        summary_quantile: Summary quantile (overrides *config*).
        colorizer: Shell colours; defaults follow ``config.color``.
        config: Defaults; ``DiffConfig()`` if not given.
        report_dir: Optional directory receiving ``circuit_diff.json`` and the
            rendered report.

    Returns:
        The rendered report.
    """
    config = (config or DiffConfig()).override(
        header=header,
        repository=repository,
        summary_quantile=summary_quantile,
    )
    diff = compare_workspaces(source, compare)
    text = render_diff(
        diff,
        output_format,
        config=config,
        commit_hash=commit_hash,
        ref_commit_hash=ref_commit_hash,
        colorizer=colorizer,
    )

    if report_dir:
        out = Path(report_dir)
        out.mkdir(parents=True, exist_ok=True)
        (out / "circuit_diff.json").write_text(
            json.dumps(diff.to_dict(), indent=2) + "\n", encoding="utf-8"
        )
        (out / f"circuit_diff{_REPORT_SUFFIXES[output_format]}").write_text(text + "\n", encoding="utf-8")
        logger.info("Reports written to %s", out)

    return text
