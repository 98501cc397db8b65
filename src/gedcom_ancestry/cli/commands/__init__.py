"""
CLI command modules for gedcom_ancestry.

Each command module defines a single Typer-compatible command function.
"""

from gedcom_ancestry.cli.commands.report import report_command
from gedcom_ancestry.cli.commands.stats import stats_command

__all__ = [
    "report_command",
    "stats_command",
]
