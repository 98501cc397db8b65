"""
gedcom_ancestry: read a GEDCOM export into people, families, notes and
document metadata.

    from gedcom_ancestry import parse_file

    result = parse_file("family.ged")
    result.ancestry.people      # {person_id: Person}
    result.diagnostics          # everything that looked wrong
"""

from gedcom_ancestry.diagnostics import Diagnostic, Diagnostics
from gedcom_ancestry.pipeline import ParseResult, parse_file, parse_lines

__version__ = "0.1.0"

__all__ = [
    "Diagnostic",
    "Diagnostics",
    "ParseResult",
    "parse_file",
    "parse_lines",
]
