from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gedcom_ancestry.cli.utils import load_gedcom

console = Console(emoji=False)


def stats_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="List every diagnostic as well",
    ),
):
    """
    Show summary statistics for a GEDCOM file.
    """
    result = load_gedcom(gedcom, verbose=verbose)

    table = Table(title="GEDCOM Statistics")
    table.add_column("Item", style="bold")
    table.add_column("Count", justify="right")

    for label, count in result.summary().items():
        table.add_row(label, str(count))
    table.add_row("Diagnostics", str(len(result.diagnostics)))

    console.print(table)

    if verbose:
        for diagnostic in result.diagnostics:
            console.print(str(diagnostic), markup=False, highlight=False)
