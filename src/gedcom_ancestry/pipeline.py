"""
Pipeline runner: raw lines -> tokens -> record forest -> Ancestry.

The three stages run strictly in sequence, each fully materializing its
output before the next starts. All input problems go to one Diagnostics
sink; nothing here raises for bad GEDCOM content.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.loader import (
    DataForest,
    Token,
    build_forest,
    check_forest,
    check_tokens,
    read_lines,
    tokenize_lines,
)
from gedcom_ancestry.logging import get_logger
from gedcom_ancestry.registry.build_registry import build_registry
from gedcom_ancestry.registry.entities import Ancestry

log = get_logger(__name__)


@dataclass
class ParseResult:
    lines_read: int
    tokens: List[Token]
    forest: DataForest
    ancestry: Ancestry
    diagnostics: Diagnostics
    source: Optional[str] = None
    elapsed: float = 0.0

    def summary(self) -> Dict[str, int]:
        """Counts for the run summary, in presentation order."""
        return {
            "Lines read": self.lines_read,
            "Lines parsed": len(self.tokens),
            "Records built": len(self.forest),
            "Lines ignored": self.ancestry.unused_line_count,
            "Persons": self.ancestry.person_count,
            "Families": self.ancestry.family_count,
            "Notes": self.ancestry.note_count,
        }

    def format_summary(self) -> str:
        lines = []
        if self.source:
            lines.append(f"Input file: {self.source}")
        lines.extend(f"{label}: {count}" for label, count in self.summary().items())
        return "\n".join(lines)


def parse_lines(
    lines: Sequence[str],
    diagnostics: Optional[Diagnostics] = None,
    *,
    source: Optional[str] = None,
) -> ParseResult:
    """Run the full pipeline over already-split lines."""
    if diagnostics is None:
        diagnostics = Diagnostics()

    t0 = time.perf_counter()

    tokens = tokenize_lines(lines, diagnostics)
    check_tokens(tokens, diagnostics, line_count=len(lines))

    forest = build_forest(tokens)
    check_forest(forest, diagnostics)

    ancestry = build_registry(forest, diagnostics)

    elapsed = time.perf_counter() - t0
    log.info(
        "Parsed %d lines into %d records in %.2fs (%d diagnostics)",
        len(lines), len(forest), elapsed, len(diagnostics),
    )

    return ParseResult(
        lines_read=len(lines),
        tokens=tokens,
        forest=forest,
        ancestry=ancestry,
        diagnostics=diagnostics,
        source=source,
        elapsed=elapsed,
    )


def parse_file(
    path: Union[str, Path],
    diagnostics: Optional[Diagnostics] = None,
) -> ParseResult:
    """
    Read and parse a GEDCOM file.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
    """
    log.info("Loading GEDCOM: %s", path)
    lines = read_lines(path)
    return parse_lines(lines, diagnostics, source=str(path))
