from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gedcom_ancestry.cli.utils import diagnostics_text, err_console, load_gedcom, write_text
from gedcom_ancestry.config import get_config
from gedcom_ancestry.reporter import DEFAULT_LINE_LENGTH, Reporter


def report_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    no_ids: bool = typer.Option(
        False,
        "--no-ids",
        "-i",
        help="Leave person IDs out of the report",
    ),
    sort: bool = typer.Option(
        False,
        "--sort",
        "-s",
        help="Order people by name instead of by ID",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write the report to a file instead of stdout",
    ),
    errors: Optional[Path] = typer.Option(
        None,
        "--errors",
        "-e",
        help="Write diagnostics and summary to a file instead of stderr",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Write a text report of every person in a GEDCOM file.
    """
    cfg = get_config().report
    result = load_gedcom(gedcom, verbose=verbose)

    reporter = Reporter(
        result.ancestry,
        file_name=gedcom.name,
        show_person_ids=False if no_ids else bool(cfg.get("show_person_ids", True)),
        sort_by_name=sort or bool(cfg.get("sort_by_name", False)),
        line_length=int(cfg.get("line_length", DEFAULT_LINE_LENGTH)),
        diagnostics=result.diagnostics,
    )
    write_text(reporter.render(), out=out)

    write_text(
        diagnostics_text(result.diagnostics, result.format_summary()),
        out=errors,
        to_stderr=True,
    )

    if verbose:
        err_console.log("Report complete")
