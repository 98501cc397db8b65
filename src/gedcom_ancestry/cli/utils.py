from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.logging import set_debug
from gedcom_ancestry.pipeline import ParseResult, parse_file

console = Console(emoji=False)
err_console = Console(stderr=True, emoji=False)


def load_gedcom(path: Path, *, verbose: bool = False) -> ParseResult:
    """
    Full tokenizer -> tree builder -> extractor run over one file.
    """
    if not path.exists():
        err_console.print(f"[bold red]GEDCOM file not found:[/bold red] {path}")
        raise typer.Exit(code=1)

    if verbose:
        set_debug(True)

    result = parse_file(path)

    if verbose:
        err_console.log(f"Loaded GEDCOM in {result.elapsed:.2f}s")

    return result


def diagnostics_text(diagnostics: Diagnostics, summary: str) -> str:
    """The batch of diagnostics followed by the run summary."""
    if len(diagnostics) == 0:
        lines = ["No errors were reported during processing", ""]
    else:
        lines = [diagnostics.format(), "", "End of error reports", ""]
    lines += ["Summary of results:", "", summary]
    return "\n".join(lines) + "\n"


def write_text(text: str, *, out: Optional[Path], to_stderr: bool = False) -> None:
    """
    Write text to a file, or to stdout/stderr.
    """
    if out:
        out.write_text(text, encoding="utf-8")
    elif to_stderr:
        err_console.print(text, end="", markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(text, end="", markup=False, highlight=False, soft_wrap=True)
