from __future__ import annotations

from .entities import (
    Ancestry,
    Child,
    DateTime,
    Event,
    Family,
    Header,
    Name,
    NameKind,
    Note,
    Person,
)
from .identifier import Identifier, parse_identifier

__all__ = [
    "Ancestry",
    "Child",
    "DateTime",
    "Event",
    "Family",
    "Header",
    "Identifier",
    "Name",
    "NameKind",
    "Note",
    "Person",
    "parse_identifier",
]
