"""
Diagnostic sink shared by the tokenizer, tree builder and entity extractor.

Input problems are never raised; they are reported here, optionally tied to
the 0-based line number of the offending input line, and presented as a batch
at the end of a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from gedcom_ancestry.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    message: str
    lineno: Optional[int] = None

    def __str__(self) -> str:
        if self.lineno is None:
            return self.message
        return f"line {self.lineno}: {self.message}"


@dataclass
class Diagnostics:
    """Ordered collection of diagnostics for one run."""

    entries: List[Diagnostic] = field(default_factory=list)

    def report(self, message: str, lineno: Optional[int] = None) -> None:
        entry = Diagnostic(message=message, lineno=lineno)
        self.entries.append(entry)
        log.debug("%s", entry)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def messages(self) -> List[str]:
        return [d.message for d in self.entries]

    def at_line(self, lineno: int) -> List[Diagnostic]:
        return [d for d in self.entries if d.lineno == lineno]

    def format(self) -> str:
        return "\n".join(str(d) for d in self.entries)
