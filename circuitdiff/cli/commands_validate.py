"""``circuitdiff validate`` — check report files against the workspace report schema."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table


def _validate_one(filepath: Path) -> list[str]:
    """Return a list of error messages (empty = valid)."""
    from circuitdiff.core.schemas import report_errors

    try:
        data = json.loads(filepath.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        return [f"Encoding error: {exc}"]
    except json.JSONDecodeError as exc:
        return [f"JSON parse error: {exc}"]
    return report_errors(data)


@click.command("validate")
@click.argument("reports", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table",
              help="Output format.")
def validate(reports: tuple[str, ...], fmt: str) -> None:
    """Validate workspace report JSON files.

    Exits with status 1 when any file is invalid.
    """
    err_console = Console(stderr=True)
    results: list[dict[str, Any]] = []
    total_errors = 0

    for report in reports:
        errs = _validate_one(Path(report))
        total_errors += len(errs)
        results.append({
            "file": report,
            "status": "invalid" if errs else "valid",
            "errors": errs,
        })

    if fmt == "json":
        click.echo(json.dumps({"results": results, "total_errors": total_errors}, indent=2))
    else:
        table = Table(title="Report Validation")
        table.add_column("File", style="cyan")
        table.add_column("Status")
        table.add_column("Errors", style="red")

        for r in results:
            status_style = "[green]valid[/green]" if r["status"] == "valid" else "[red]INVALID[/red]"
            err_text = "\n".join(r["errors"][:3]) if r["errors"] else ""
            if len(r["errors"]) > 3:
                err_text += f"\n... +{len(r['errors']) - 3} more"
            table.add_row(escape(r["file"]), status_style, escape(err_text))

        err_console.print(table)
        if total_errors:
            err_console.print(f"\n[red]{total_errors} validation error(s) found.[/red]")
        else:
            err_console.print("\n[green]All reports are valid.[/green]")

    if total_errors:
        raise SystemExit(1)
