"""CLI command for workspace report comparison."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from circuitdiff.errors import CircuitDiffError

logger = logging.getLogger("circuitdiff.cli")

_err_console = Console(stderr=True)


@click.command("diff")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.argument("compare", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "-f", "output_format", type=click.Choice(["markdown", "shell", "json"]),
              default="shell", help="Output format: shell (default), markdown, or json.")
@click.option("--header", type=str, default=None, help="Markdown report header.")
@click.option("--repository", type=str, default=None, help="Repository slug used in commit links.")
@click.option("--commit", "commit_hash", type=str, default=None,
              help="Commit of the COMPARE report (required for markdown).")
@click.option("--ref-commit", "ref_commit_hash", type=str, default=None,
              help="Commit of the SOURCE report.")
@click.option("--quantile", "summary_quantile", type=click.FloatRange(0, 1), default=None,
              help="Summary quantile (default 0.8: top 20% of changes).")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write the report to a file instead of stdout.")
@click.option("--color/--no-color", default=None,
              help="Colour shell output (default: only when stdout is a terminal).")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="pyproject.toml holding a [tool.circuitdiff] section.")
def diff(
    source: str,
    compare: str,
    output_format: str,
    header: str | None,
    repository: str | None,
    commit_hash: str | None,
    ref_commit_hash: str | None,
    summary_quantile: float | None,
    output: str | None,
    color: bool | None,
    config_path: str | None,
) -> None:
    """Compare the circuit sizes of COMPARE against the baseline SOURCE."""
    from circuitdiff.api import diff_reports
    from circuitdiff.config import load_config

    if output_format == "markdown" and not commit_hash:
        raise click.UsageError("--commit is required for markdown output.")

    if color is None and (output is not None or not sys.stdout.isatty()):
        color = False

    try:
        config = load_config(config_path).override(color=color)
        text = diff_reports(
            source,
            compare,
            output_format,
            header=header,
            repository=repository,
            commit_hash=commit_hash,
            ref_commit_hash=ref_commit_hash,
            summary_quantile=summary_quantile,
            config=config,
        )
    except CircuitDiffError as exc:
        logger.debug("diff failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc

    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        _err_console.print(f"[green]✓ Report written to {escape(output)}[/green]")
        return

    click.echo(text, color=color)
