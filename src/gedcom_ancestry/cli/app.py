from __future__ import annotations

import typer

from gedcom_ancestry.cli.commands.report import report_command
from gedcom_ancestry.cli.commands.stats import stats_command

app = typer.Typer(
    name="gedcom-ancestry",
    help="Read a GEDCOM export into people, families and notes, and report on them",
    add_completion=False,
)

app.command("report")(report_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
