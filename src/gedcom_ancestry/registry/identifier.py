from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

# "@" + upper-case letters + digits + "@", nothing else
_XREF_RE = re.compile(r"@([A-Z]+)([0-9]+)@")

PERSON_KIND = "I"
FAMILY_KIND = "F"
NOTE_KINDS = frozenset({"N", "NI"})


@dataclass(frozen=True)
class Identifier:
    """
    A GEDCOM cross-reference such as "@I12@", split into its kind prefix
    ("I") and number (12).

    Gramps-style note identifiers come in two kinds: "@NI9@" (first note
    about person 9) and "@N2@" (any other note). They share numbers but not
    identifiers, so notes are keyed by the full text.
    """
    kind: str
    number: int
    text: str

    @property
    def is_person(self) -> bool:
        return self.kind == PERSON_KIND

    @property
    def is_family(self) -> bool:
        return self.kind == FAMILY_KIND

    @property
    def is_note(self) -> bool:
        return self.kind in NOTE_KINDS

    def __str__(self) -> str:
        return self.text


def parse_identifier(text: str) -> Optional[Identifier]:
    """Return the Identifier for ``text``, or None if it does not match."""
    match = _XREF_RE.fullmatch(text)
    if match is None:
        return None
    return Identifier(kind=match.group(1), number=int(match.group(2)), text=text)
