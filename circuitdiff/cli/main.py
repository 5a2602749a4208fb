"""circuitdiff CLI — main entry point.

Usage::

    circuitdiff diff base.json head.json --format shell
    circuitdiff diff base.json head.json --commit abc123 --repository owner/repo
    circuitdiff validate head.json
"""

from __future__ import annotations

import logging

import click

from circuitdiff.cli.commands_diff import diff
from circuitdiff.cli.commands_validate import validate


@click.group()
@click.version_option(package_name="circuitdiff")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """circuitdiff — compare circuit sizes between two workspace reports."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


cli.add_command(diff)
cli.add_command(validate)

if __name__ == "__main__":
    cli()
